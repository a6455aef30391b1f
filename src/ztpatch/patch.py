#!/usr/bin/env python3

"""ZT binary patch files

A ZT patch describes an equal-length modification of a file as a list of
runs, each run being a block of at most 255 replacement bytes at a fixed
offset. Patch files are laid out as:

    PatchFile.Header     target identifier and run count
    PatchFile.RunHeader  run offset and length, followed by the run bytes
    ...                  (repeated for each run)
    comment              optional UTF-8 text until the end of the file
"""

import bisect
import ctypes
import os
import pathlib
from collections.abc import Iterator

from ztpatch.target import UNKNOWN_TARGET_NAME, normalize_comment, normalize_target_name

MAX_RUN_LENGTH = 255
MAX_RUN_COUNT = 0xFFFF
MAX_RUN_OFFSET = 0x7FFFFFFF


class PatchError(Exception):
    """Generic patch file exception"""


class InvalidArgument(PatchError, ValueError):
    """Invalid value passed to a patch operation"""


class LengthMismatch(PatchError, ValueError):
    """Original and modified files differ in length"""


class CapacityExceeded(PatchError):
    """Patch requires more runs than a patch file can describe"""


class FormatError(PatchError):
    """Patch file is truncated or malformed"""


class PatchFile:
    """In-memory representation of a ZT patch file"""

    class Header(ctypes.LittleEndianStructure):
        _fields_ = [
            ("target", ctypes.c_char * 13),
            ("count", ctypes.c_uint16),
        ]
        _pack_ = 1

    class RunHeader(ctypes.LittleEndianStructure):
        _fields_ = [
            ("offset", ctypes.c_int32),
            ("length", ctypes.c_uint8),
        ]
        _pack_ = 1

    def __init__(self, target_name: str | None = None, comment: str | None = None):
        # Run offsets are kept sorted alongside the offset -> data mapping
        self._offsets: list[int] = []
        self._runs: dict[int, bytes] = {}
        self._target_name = normalize_target_name(target_name)
        self._comment = normalize_comment(comment)
        self.file_name: pathlib.Path | None = None

    @property
    def target_name(self) -> str:
        """Identifier of the file the patch applies to"""
        return self._target_name

    @target_name.setter
    def target_name(self, value: str | None):
        self._target_name = normalize_target_name(value)

    @property
    def comment(self) -> str | None:
        return self._comment

    @comment.setter
    def comment(self, value: str | None):
        self._comment = normalize_comment(value)

    @property
    def name(self) -> str | None:
        """Patch file name without directory or extension"""
        if self.file_name is None:
            return None
        return self.file_name.stem

    @property
    def runs(self) -> list[tuple[int, bytes]]:
        """Runs in ascending offset order"""
        return list(self)

    @property
    def run_count(self) -> int:
        return len(self._offsets)

    @property
    def target_minimum_length(self) -> int:
        """Minimum file length the patch can be applied to"""
        if len(self._offsets) == 0:
            return 0
        return max(offset + len(data) for offset, data in self)

    def __len__(self):
        return len(self._offsets)

    def __iter__(self) -> Iterator[tuple[int, bytes]]:
        for offset in self._offsets:
            yield offset, self._runs[offset]

    def __eq__(self, other):
        if not isinstance(other, PatchFile):
            return NotImplemented
        return (
            self._target_name == other._target_name
            and self._comment == other._comment
            and self._runs == other._runs
        )

    def __repr__(self):
        return f"PatchFile({self._target_name!r}, {len(self)} runs, {self.target_minimum_length} bytes)"

    def add(self, offset: int, data: bytes) -> None:
        """Store replacement bytes at an offset, split into runs of at most 255 bytes

        Chunks landing on an existing run offset replace that run. Data that
        would overlap any other stored run is rejected.
        """
        if offset is None or offset < 0:
            raise InvalidArgument(f"Run offset must not be negative ({offset})")
        if data is None:
            raise InvalidArgument("Run data missing")
        if offset + max(len(data) - 1, 0) > MAX_RUN_OFFSET:
            raise InvalidArgument(f"Run offset {offset} exceeds the patch file address range")

        chunks = [
            (offset + idx, bytes(data[idx : idx + MAX_RUN_LENGTH]))
            for idx in range(0, len(data), MAX_RUN_LENGTH)
        ]
        # Existing runs may only be replaced at chunk offsets, never partially covered
        chunk_offsets = {chunk_offset for chunk_offset, _ in chunks}
        idx = bisect.bisect_left(self._offsets, offset)
        if len(chunks) > 0 and idx > 0:
            previous = self._offsets[idx - 1]
            if previous + len(self._runs[previous]) > offset:
                raise InvalidArgument(f"Run at {offset:08x} overlaps run at {previous:08x}")
        for existing in self._offsets[idx : bisect.bisect_left(self._offsets, offset + len(data))]:
            if existing not in chunk_offsets:
                raise InvalidArgument(f"Run at {offset:08x} overlaps run at {existing:08x}")

        new_runs = sum(1 for chunk_offset, _ in chunks if chunk_offset not in self._runs)
        if len(self._runs) + new_runs > MAX_RUN_COUNT:
            raise CapacityExceeded(
                f"Patch would contain {len(self._runs) + new_runs} runs (maximum {MAX_RUN_COUNT})"
            )

        for chunk_offset, chunk in chunks:
            if chunk_offset not in self._runs:
                bisect.insort(self._offsets, chunk_offset)
            self._runs[chunk_offset] = chunk

    def compact(self) -> None:
        """Merge byte-adjacent runs to minimise the number of stored runs

        A run that is already at the maximum length never starts a merge, so
        full runs at the head of an adjacent sequence are preserved as-is. The
        remainder of each adjacent sequence is joined and split back into
        maximum length runs.
        """
        # (start offset, joined data, number of runs joined)
        groups: list[tuple[int, bytearray, int]] = []
        for offset, data in self:
            if len(groups) > 0:
                start, joined, count = groups[-1]
                full_head = count == 1 and len(joined) == MAX_RUN_LENGTH
                if start + len(joined) == offset and not full_head:
                    joined += data
                    groups[-1] = (start, joined, count + 1)
                    continue
            groups.append((offset, bytearray(data), 1))

        if all(count == 1 for _, _, count in groups):
            return

        self._offsets = []
        self._runs = {}
        for start, joined, _ in groups:
            self.add(start, bytes(joined))

    @classmethod
    def create(cls, original: bytes, modified: bytes) -> "PatchFile":
        """Generate the patch that converts ``original`` into ``modified``"""
        if original is None or modified is None:
            raise InvalidArgument("Original and modified data are both required")
        if len(original) != len(modified):
            raise LengthMismatch(f"Original and modified lengths differ ({len(original)} != {len(modified)})")

        patch = cls()
        length = len(original)
        offset = 0
        while offset < length:
            if original[offset] == modified[offset]:
                offset += 1
                continue
            start = offset
            while offset < length and original[offset] != modified[offset]:
                offset += 1
            patch.add(start, modified[start:offset])

        patch.compact()
        return patch

    @classmethod
    def create_from_files(cls, original: str | os.PathLike, modified: str | os.PathLike) -> "PatchFile":
        """Generate the patch between two files on disk"""
        with open(original, "rb") as f_orig:
            with open(modified, "rb") as f_new:
                return cls.create(f_orig.read(-1), f_new.read(-1))

    @classmethod
    def from_bytes(cls, b: bytes) -> "PatchFile":
        """Reconstruct a patch from the contents of a patch file"""
        header_len = ctypes.sizeof(cls.Header)
        run_header_len = ctypes.sizeof(cls.RunHeader)

        if len(b) < header_len:
            raise FormatError(f"Patch header truncated ({len(b)} < {header_len} bytes)")
        header = cls.Header.from_buffer_copy(b)
        patch = cls(header.target.decode("ascii", errors="ignore"))

        offset = header_len
        for idx in range(header.count):
            if len(b) < offset + run_header_len:
                raise FormatError(f"Run {idx}/{header.count} header truncated")
            run = cls.RunHeader.from_buffer_copy(b, offset)
            offset += run_header_len

            if run.offset < 0:
                raise FormatError(f"Run {idx} has negative offset ({run.offset})")
            if run.length == 0:
                raise FormatError(f"Run {idx} at {run.offset:08x} is empty")
            if len(b) < offset + run.length:
                raise FormatError(
                    f"Run {idx} data truncated ({len(b) - offset} < {run.length} bytes)"
                )
            if run.offset in patch._runs:
                raise FormatError(f"Run {idx} duplicates offset {run.offset:08x}")

            try:
                patch.add(run.offset, b[offset : offset + run.length])
            except InvalidArgument as e:
                raise FormatError(f"Run {idx} is invalid ({e})") from e
            offset += run.length

        if offset < len(b):
            try:
                patch.comment = bytes(b[offset:]).decode("utf-8")
            except UnicodeDecodeError as e:
                raise FormatError(f"Patch comment is not valid UTF-8 ({e.reason})") from e

        patch.compact()
        return patch

    @classmethod
    def from_file(cls, path: str | os.PathLike) -> "PatchFile":
        """Load a patch file from disk"""
        path = pathlib.Path(path)
        with path.open("rb") as f:
            patch = cls.from_bytes(f.read(-1))
        patch.file_name = path
        return patch

    def __bytes__(self) -> bytes:
        self.compact()

        output = bytearray(self.Header(self._target_name.encode("ascii"), len(self)))
        for offset, data in self:
            output += bytes(self.RunHeader(offset, len(data)))
            output += data
        if self._comment is not None:
            output += self._comment.encode("utf-8")
        return bytes(output)

    def save(self, path: str | os.PathLike) -> None:
        """Write the patch file to disk"""
        path = pathlib.Path(path)
        patch_bytes = bytes(self)
        with path.open("wb") as f:
            f.write(patch_bytes)
        self.file_name = path

    def apply(self, buffer: bytearray) -> None:
        """Apply the patch to a mutable buffer in place"""
        if buffer is None:
            raise InvalidArgument("Target buffer missing")
        minimum = self.target_minimum_length
        if len(buffer) < minimum:
            raise InvalidArgument(f"Target too short for patch ({len(buffer)} < {minimum} bytes)")
        if len(buffer) == 0:
            return

        for offset, data in self:
            buffer[offset : offset + len(data)] = data

    def patched(self, original: bytes) -> bytes:
        """Return a patched copy of ``original``"""
        if original is None:
            raise InvalidArgument("Original data missing")
        output = bytearray(original)
        self.apply(output)
        return bytes(output)

    def apply_file(self, path: str | os.PathLike) -> None:
        """Patch a file on disk in place"""
        with open(path, "rb") as f:
            output = self.patched(f.read(-1))
        with open(path, "wb") as f:
            f.write(output)
