"""Interfaces for the external collaborators of a generation session."""

from .document_sampler import DocumentSampler
from .form_generator import FormGenerator

__all__ = [
    "DocumentSampler",
    "FormGenerator",
]
