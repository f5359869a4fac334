"""Entry point for obsidian-cli.

Run with: python -m obsidian_cli
Or via the installed script: obsidian
"""

from obsidian_cli.cli import main

if __name__ == "__main__":
    main()
