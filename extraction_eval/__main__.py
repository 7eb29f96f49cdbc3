"""
Entry point for running Extraction Eval as a module.

    python -m extraction_eval demo
    python -m extraction_eval evaluate --config eval.config.yaml --input runs.yaml
"""

from extraction_eval.cli import app

if __name__ == "__main__":
    app()
