"""
Entry point for running the progression CLI with `python -m backend`.
"""
from backend.cli import main

if __name__ == "__main__":
    main()
