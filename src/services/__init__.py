"""Domain services: label text extraction, ingredient stores and the classification pipeline."""
