"""Launch the hierarchical sales table."""

from salestree.app import run_app


if __name__ == "__main__":
    run_app()
