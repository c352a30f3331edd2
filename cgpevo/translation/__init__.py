"""Translation of grown brains to PyTorch modules."""

from .pytorch import CGPModule, to_pytorch_model  # noqa: F401

__all__ = ['CGPModule', 'to_pytorch_model']
