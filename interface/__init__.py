"""
Interface package: protocol front ends for the search core.

Modules:
    uci: Universal Chess Interface (UCI) handler.
         Reads commands from stdin, writes responses to stdout.
         Run with `python interface/uci.py` or the `gamesearch-uci` script.
"""
