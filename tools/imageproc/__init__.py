"""Image normalization helpers (resize, flatten, re-encode)."""

from .postprocess import normalize_image, flatten_transparency, fit_to_canvas

__all__ = ["normalize_image", "flatten_transparency", "fit_to_canvas"]
