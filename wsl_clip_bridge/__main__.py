"""Allow ``python -m wsl_clip_bridge``."""

from wsl_clip_bridge.cli.main import main

if __name__ == "__main__":
    main()
