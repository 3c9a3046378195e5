"""Conversion pipeline."""

from .conversion import ConversionPipeline

__all__ = ["ConversionPipeline"]
