"""Substitution strategies, markup converters, and the page rendering pipeline."""

from .converters import AsciiDocConverter, ConversionError, MarkdownConverter
from .models import Variable
from .pipeline import RenderingPipeline
from .substitution import (
    JinjaSubstitutor,
    NaiveSubstitutor,
    SubstitutionError,
    build_substitutor,
)

__all__ = [
    "AsciiDocConverter",
    "ConversionError",
    "JinjaSubstitutor",
    "MarkdownConverter",
    "NaiveSubstitutor",
    "RenderingPipeline",
    "SubstitutionError",
    "Variable",
    "build_substitutor",
]
