"""Entry point for ``python -m microbench``."""

from microbench.cli import microbench

if __name__ == "__main__":
    microbench()
