"""Validated run configuration.

WHY: The source folder, the output folder and the resize setting are
needed deep inside the pipeline. Passing one validated object to every
step keeps those steps free of globals and of the working directory.

HOW: RunOptions is a pydantic model. Field validators resolve paths,
check that they exist, and turn the resize string into a ResizeSpec.
The CLI builds it from argparse results; tests build it directly.

RULES:
- source: an existing directory, or an existing .mp4 file (single-file mode)
- target: an existing directory, or a .mkv file name inside one. A file
  target becomes combined_output and its folder becomes the target.
  Defaults to the source's directory
- resize: anything parse_resize() accepts, or a ResizeSpec
- Invalid input raises pydantic.ValidationError
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from vconcat.config import DEFAULT_RESIZE, INTERMEDIATE_EXTENSION, VIDEO_EXTENSION
from vconcat.media.resize import ResizeSpec, parse_resize


class RunOptions(BaseModel):
    """Everything one vconcat run needs to know."""

    model_config = {"arbitrary_types_allowed": True}

    source: Path = Field(description="Folder of clips, or a single .mp4 clip.")
    target: Optional[Path] = Field(
        default=None,
        description="Folder for output files, or the .mkv name of the combined video; "
                    "defaults to the source folder.",
    )
    combined_output: Optional[Path] = Field(
        default=None,
        description="File name of the combined video; derived from a file target.",
    )
    resize: ResizeSpec = Field(
        default_factory=lambda: parse_resize(DEFAULT_RESIZE),
        description="Scale setting: 25%, 0.25, w320 or h240.",
    )
    concat: bool = Field(default=True, description="Join the processed clips into one file.")
    keep: bool = Field(default=False, description="Keep intermediate files.")

    @field_validator("source")
    @classmethod
    def _check_source(cls, value: Path) -> Path:
        path = value.expanduser().resolve()
        if path.is_dir():
            return path
        if path.is_file():
            if path.suffix.lower() != VIDEO_EXTENSION:
                raise ValueError("Not a {} file: {}".format(VIDEO_EXTENSION, path))
            return path
        raise ValueError("No such file or directory: {}".format(path))

    @field_validator("target")
    @classmethod
    def _check_target(cls, value: Optional[Path]) -> Optional[Path]:
        if value is None:
            return None
        path = value.expanduser().resolve()
        if path.is_dir():
            return path
        if path.suffix.lower() == INTERMEDIATE_EXTENSION:
            if not path.parent.is_dir():
                raise ValueError("No such directory: {}".format(path.parent))
            return path
        raise ValueError("No such directory: {}".format(path))

    @field_validator("resize", mode="before")
    @classmethod
    def _parse_resize(cls, value: Any) -> ResizeSpec:
        if isinstance(value, ResizeSpec):
            return value
        return parse_resize(str(value))

    @model_validator(mode="after")
    def _resolve_target(self) -> "RunOptions":
        if self.target is None:
            self.target = self.source_dir
        elif not self.target.is_dir():
            # A file target names the combined video; its folder receives the rest.
            self.combined_output = self.target
            self.target = self.target.parent
        return self

    @property
    def single_file(self) -> bool:
        return self.source.is_file()

    @property
    def source_dir(self) -> Path:
        return self.source.parent if self.single_file else self.source

    @property
    def destination_dir(self) -> Path:
        return self.target or self.source_dir
