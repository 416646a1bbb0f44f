"""Prompt style configuration."""

from pydantic import BaseModel, Field


DEFAULT_STYLE = "Retro Comic Book Illustration"

DEFAULT_CONSTRAINTS = (
    "No borders or frames. Solid light background color (for example #F7F7F7). "
    "No textures, gradients or extra elements. No text or watermarks. "
    "Required size: {width}px wide by {height}px tall."
)


class PromptStyleConfig(BaseModel):
    """Style and constraints appended to every prompt.

    ``constraints`` may contain ``{width}`` and ``{height}`` placeholders,
    filled with the target canvas size when the prompt is built.
    """

    style: str = Field(default=DEFAULT_STYLE, description="Visual style enforced on every image")
    constraints: str = Field(
        default=DEFAULT_CONSTRAINTS,
        description="Constraint sentence(s) appended after the style"
    )

    def render_constraints(self, width: int, height: int) -> str:
        """Return the constraints with the canvas size filled in."""
        return self.constraints.replace("{width}", str(width)).replace("{height}", str(height))
