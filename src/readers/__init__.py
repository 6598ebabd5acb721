"""Readers for loading seed data."""

from src.readers.seed_data_reader import SeedDataReader, load_dataset

__all__ = ["SeedDataReader", "load_dataset"]
