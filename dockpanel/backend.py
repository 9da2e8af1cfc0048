"""Container-engine backend driven through the ``docker`` command line.

Listings use ``--format '{{json .}}'`` (one JSON object per line); inspect
returns the first element of the JSON array docker prints. Any non-zero exit
raises ``BackendError`` carrying docker's stderr.
"""

from __future__ import annotations

import json
import logging
import subprocess
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Protocol

from .errors import BackendError

logger = logging.getLogger(__name__)

JSON_LINE_FORMAT = "{{json .}}"
RESOURCE_KINDS = ("image", "container", "volume")


@dataclass(frozen=True)
class ImageRecord:
    id: str
    repository: str
    tag: str
    created: str = ""
    size: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> ImageRecord:
        return cls(
            id=str(data.get("ID", "")),
            repository=str(data.get("Repository", "")),
            tag=str(data.get("Tag", "")),
            created=str(data.get("CreatedSince", "")),
            size=str(data.get("Size", "")),
        )

    @property
    def reference(self) -> str:
        if self.repository and self.repository != "<none>":
            return f"{self.repository}:{self.tag}"
        return self.id


@dataclass(frozen=True)
class ContainerRecord:
    id: str
    name: str
    image: str
    status: str = ""
    ports: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> ContainerRecord:
        return cls(
            id=str(data.get("ID", "")),
            name=str(data.get("Names", "")),
            image=str(data.get("Image", "")),
            status=str(data.get("Status", "")),
            ports=str(data.get("Ports", "")),
        )


@dataclass(frozen=True)
class VolumeRecord:
    name: str
    driver: str
    mountpoint: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> VolumeRecord:
        return cls(
            name=str(data.get("Name", "")),
            driver=str(data.get("Driver", "")),
            mountpoint=str(data.get("Mountpoint", "")),
        )


class Backend(Protocol):
    """Operations the dashboard needs from a container engine."""

    def images(self) -> list[ImageRecord]: ...

    def containers(self) -> list[ContainerRecord]: ...

    def volumes(self) -> list[VolumeRecord]: ...

    def inspect(self, kind: str, ident: str) -> dict[str, object]: ...

    def remove_image(self, ident: str) -> None: ...

    def remove_container(self, ident: str) -> None: ...

    def remove_volume(self, name: str) -> None: ...

    def pull_image(self, name: str, tag: str) -> None: ...

    def create_volume(self, name: str, driver: str) -> None: ...


Runner = Callable[..., "subprocess.CompletedProcess[str]"]


class DockerCli:
    """``Backend`` implementation that shells out to the docker binary."""

    def __init__(
        self,
        binary: str = "docker",
        *,
        timeout: float | None = None,
        runner: Runner = subprocess.run,
    ) -> None:
        self.binary = binary
        self.timeout = timeout
        self._runner = runner

    def _run(self, args: list[str]) -> str:
        cmd = [self.binary, *args]
        logger.debug("running %s", " ".join(cmd))
        try:
            result = self._runner(cmd, capture_output=True, text=True, timeout=self.timeout)
        except subprocess.TimeoutExpired as exc:
            raise BackendError(cmd, None, f"no answer after {exc.timeout:g}s") from exc
        except OSError as exc:
            raise BackendError(cmd, None, str(exc)) from exc
        if result.returncode != 0:
            raise BackendError(cmd, result.returncode, result.stderr or "")
        return result.stdout or ""

    def _run_json_lines(self, args: list[str]) -> list[dict[str, object]]:
        items: list[dict[str, object]] = []
        for line in self._run(args).splitlines():
            line = line.strip()
            if not line:
                continue
            try:
                data = json.loads(line)
            except json.JSONDecodeError:
                logger.warning("skipping malformed docker output line: %.100s", line)
                continue
            if isinstance(data, dict):
                items.append(data)
        return items

    def images(self) -> list[ImageRecord]:
        raw = self._run_json_lines(["images", "--format", JSON_LINE_FORMAT])
        return [ImageRecord.from_dict(item) for item in raw]

    def containers(self) -> list[ContainerRecord]:
        raw = self._run_json_lines(["ps", "-a", "--format", JSON_LINE_FORMAT])
        return [ContainerRecord.from_dict(item) for item in raw]

    def volumes(self) -> list[VolumeRecord]:
        raw = self._run_json_lines(["volume", "ls", "--format", JSON_LINE_FORMAT])
        return [VolumeRecord.from_dict(item) for item in raw]

    def inspect(self, kind: str, ident: str) -> dict[str, object]:
        if kind not in RESOURCE_KINDS:
            raise ValueError(f"unknown resource kind: {kind!r}")
        cmd = [kind, "inspect", ident]
        output = self._run(cmd)
        try:
            data = json.loads(output)
        except json.JSONDecodeError as exc:
            raise BackendError([self.binary, *cmd], None, f"unreadable inspect output: {exc}") from exc
        if isinstance(data, list):
            data = data[0] if data else {}
        if not isinstance(data, dict):
            raise BackendError([self.binary, *cmd], None, "inspect returned no object")
        return data

    def remove_image(self, ident: str) -> None:
        self._run(["rmi", ident])

    def remove_container(self, ident: str) -> None:
        self._run(["rm", ident])

    def remove_volume(self, name: str) -> None:
        self._run(["volume", "rm", name])

    def pull_image(self, name: str, tag: str) -> None:
        self._run(["pull", f"{name}:{tag or 'latest'}"])

    def create_volume(self, name: str, driver: str) -> None:
        args = ["volume", "create"]
        if driver:
            args.extend(["--driver", driver])
        if name:
            args.append(name)
        self._run(args)


__all__ = [
    "Backend",
    "DockerCli",
    "ImageRecord",
    "ContainerRecord",
    "VolumeRecord",
    "RESOURCE_KINDS",
]
