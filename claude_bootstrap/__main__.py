"""Allow ``python -m claude_bootstrap``."""

from .cli import run

if __name__ == "__main__":
    run()
