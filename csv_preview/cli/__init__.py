"""Command line entrypoint (``csv-preview`` / ``python -m csv_preview.cli``)."""
