"""Project trees of PDF files, check marks, result folders and per-folder merge builders."""

__version__ = "1.3.0"