#!/usr/bin/env python3
"""
Main entry point for the IRC bot
"""

from ircbot.main import run

if __name__ == "__main__":
    run()
