"""
URL Content Saver CLI entry point.

Usage:
    python -m urlsaver serve
    python -m urlsaver serve --http --port 3000
    python -m urlsaver save https://example.com out/example.html
"""

from urlsaver.cli import main

if __name__ == "__main__":
    main()
