"""Seed datasets for sessions without a seed file."""

from src.data.sample_data import Dataset, build_sample_dataset

__all__ = ["Dataset", "build_sample_dataset"]
