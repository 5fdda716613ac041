#!/usr/bin/env python3
"""Simple runner script for Media Grabber."""

import sys


def main():
    args = sys.argv[1:]
    if "--help" in args or "-h" in args:
        print("""
Media Grabber - find the media in a post and fit it to the page

Usage:
    python run.py [key=value ...]

Options (Hydra overrides):
    input.fixture=PATH     Site fixture (default: ./data/site.json)
    grabber.post_id=ID     Post to grab media from (default: 1)
    grabber.type=TYPE      audio, video or gallery (default: video)
    grabber.width=PX       Max width (default: the site's content width)
    grabber.split=true     Also print the post content without the media

Examples:
    python run.py
    python run.py grabber.post_id=2 grabber.type=audio
""")
        return

    try:
        from media_grabber.main import main as grab
    except ImportError as e:
        print(f"Import failed: {e}")
        print("\nInstall with:")
        print("  pip install -e .")
        sys.exit(1)

    grab()


if __name__ == "__main__":
    main()
