"""Pydantic models for tool responses and extracted documents."""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

UNTITLED = "Untitled"


class TextBlock(BaseModel):
    """Text content block."""

    type: Literal["text"] = "text"
    text: str


class ImageBlock(BaseModel):
    """Base64-encoded image content block."""

    type: Literal["image"] = "image"
    data: str = Field(description="Base64-encoded image bytes")
    mime_type: str = Field(description="Image MIME type, e.g. image/jpeg")


ContentBlock = Annotated[Union[TextBlock, ImageBlock], Field(discriminator="type")]


class ToolResponse(BaseModel):
    """Result of one tool invocation."""

    content: list[ContentBlock] = Field(description="Content blocks in display order")
    is_error: bool = Field(default=False, description="Whether the invocation failed")

    @classmethod
    def text(cls, text: str) -> ToolResponse:
        return cls(content=[TextBlock(text=text)])

    @classmethod
    def error(cls, text: str) -> ToolResponse:
        return cls(content=[TextBlock(text=text)], is_error=True)

    @property
    def text_content(self) -> str:
        """All text blocks joined by blank lines."""
        return "\n\n".join(block.text for block in self.content if isinstance(block, TextBlock))


class ExtractedDocument(BaseModel):
    """Main content of a page converted to Markdown."""

    title: str = Field(default=UNTITLED, description="Page title, or a placeholder")
    excerpt: str | None = Field(default=None, description="Short summary of the page")
    content: str = Field(default="", description="Markdown content")
