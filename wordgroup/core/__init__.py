"""Merge core: IR, dictionary profiles, rule table, engine and assembler.

WHY: The core package is the part every caller shares. The adapter feeds
it tokens, formatters consume the Words it produces, and nothing in here
touches files or the terminal.

HOW: ir.py defines the data structures, profiles.py normalises dictionary
tags, rules.py holds the ordered attachment rules, engine.py walks a token
sequence with them, assembler.py computes each Word's fields and stream.py
is the public iteration surface.

RULES:
- IR dataclasses are the contract; change with care
- rules.py, engine.py and assembler.py work only from the MergeConfig or
  RuleTable they are given; stream.py falls back to load_config() (the
  WORDGROUP_* environment) when the caller passes no config
- Importing rules.py imports config.py, which loads .env
  into the process environment
- Everything here is safe to share between threads once constructed
"""
