# SPDX-License-Identifier: BSD-2-Clause
# Copyright (c) deftio llc

"""Records decoded from daemon JSON payloads."""

from __future__ import annotations

import dataclasses
import json
from typing import Any

from dockwire.errors import DecodeError


def _field(obj: dict[str, Any], key: str, kind: type) -> Any:  # noqa: ANN401
    try:
        value = obj[key]
    except KeyError:
        msg = f"missing field {key!r}"
        raise DecodeError(msg) from None
    # bool is an int subclass but never a valid count or size
    if not isinstance(value, kind) or isinstance(value, bool):
        msg = f"field {key!r} should be {kind.__name__}, got {type(value).__name__}"
        raise DecodeError(msg)
    return value


@dataclasses.dataclass(frozen=True)
class Image:
    """One entry of ``GET /images/json``."""

    id: str
    created: int
    containers: int
    repo_tags: tuple[str, ...] | None
    size: int

    @classmethod
    def from_json(cls, obj: object) -> Image:
        """Build an Image from the daemon's PascalCase JSON object."""
        if not isinstance(obj, dict):
            msg = f"image entry should be an object, got {type(obj).__name__}"
            raise DecodeError(msg)

        repo_tags = obj.get("RepoTags")
        if repo_tags is not None:
            if not isinstance(repo_tags, list) or not all(isinstance(t, str) for t in repo_tags):
                msg = "field 'RepoTags' should be a list of strings"
                raise DecodeError(msg)
            repo_tags = tuple(repo_tags)

        return cls(
            id=_field(obj, "Id", str),
            created=_field(obj, "Created", int),
            containers=_field(obj, "Containers", int),
            repo_tags=repo_tags,
            size=_field(obj, "Size", int),
        )

    @property
    def short_id(self) -> str:
        """The first 12 hex digits of the ID, without the ``sha256:`` prefix."""
        return self.id.removeprefix("sha256:")[:12]


def decode_images(payload: bytes) -> list[Image]:
    """Decode a ``GET /images/json`` body."""
    try:
        data = json.loads(payload)
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise DecodeError(str(exc)) from exc
    if not isinstance(data, list):
        msg = f"expected a JSON array, got {type(data).__name__}"
        raise DecodeError(msg)
    return [Image.from_json(item) for item in data]


@dataclasses.dataclass(frozen=True)
class ProgressEvent:
    """One progress message from ``POST /images/create``."""

    status: str = ""
    id: str = ""
    progress: str = ""
    error: str = ""
    raw: dict[str, Any] = dataclasses.field(default_factory=dict, compare=False)

    @property
    def ok(self) -> bool:
        """Return True if the daemon did not report an error."""
        return not self.error

    @classmethod
    def from_segment(cls, segment: bytes) -> ProgressEvent:
        """Decode one chunk payload as a JSON progress object."""
        try:
            data = json.loads(segment.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise DecodeError(str(exc)) from exc
        if not isinstance(data, dict):
            msg = f"progress event should be an object, got {type(data).__name__}"
            raise DecodeError(msg)

        error = data.get("error", "")
        detail = data.get("errorDetail")
        if not error and isinstance(detail, dict):
            error = detail.get("message", "")

        return cls(
            status=str(data.get("status", "")),
            id=str(data.get("id", "")),
            progress=str(data.get("progress", "")),
            error=str(error),
            raw=data,
        )

    def __str__(self) -> str:
        if self.error:
            return f"error: {self.error}"
        text = " ".join(p for p in (self.status, self.progress) if p)
        return f"{self.id}: {text}" if self.id else text
