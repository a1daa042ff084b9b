"""Package entry point for ``python -m wordgroup``.

RULES:
- This file must exist for ``python -m wordgroup`` to work
- Everything is delegated to the CLI's main()
"""

if __name__ == "__main__":
    from wordgroup.cli import main
    main()
