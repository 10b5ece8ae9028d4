"""Package entry point for ``python -m insight_transcripts``."""

from insight_transcripts.cli import main

if __name__ == "__main__":
    main()
