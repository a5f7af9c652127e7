"""Assemble six single-face DDS files into one complete cube map DDS."""

import logging
from enum import Enum
from typing import List, Optional, Sequence

from tqdm import tqdm

from . import FACE_LABELS
from .config import CubemapConfig
from .core import (
    AssemblyResult,
    CubemapIOError,
    DDSHeader,
    FaceFile,
    FormatError,
    InconsistentFacesError,
    InvalidHeaderError,
    NotCubemapCompatibleError,
    NotDdsError,
    decode,
    encode_container_header,
    expected_mip_count,
    open_output,
    read_face_bytes,
    set_complete_cubemap_flag,
    validate,
)

logger = logging.getLogger("ddscubemap.assembler")

NUM_FACES = len(FACE_LABELS)


class AssemblerState(Enum):
    """Lifecycle of a single assembly run."""

    IDLE = "idle"
    READING = "reading"
    DECODING = "decoding"
    VALIDATING = "validating"
    WRITING_HEADER = "writing_header"
    APPENDING_PAYLOAD = "appending_payload"
    FINALIZING = "finalizing"
    DONE = "done"
    FAILED = "failed"


class CubemapAssembler:
    """Validate six cube faces and concatenate them into one DDS container.

    Faces are handled strictly in input order: face 0 provides the output
    header and every later face is checked against it. Any error aborts
    the run; whatever was already written to the output stays on disk.
    """

    def __init__(self, config: Optional[CubemapConfig] = None):
        self.config = config or CubemapConfig()
        self.state = AssemblerState.IDLE
        self.current_face: Optional[int] = None

    def run(self, face_paths: Sequence[str], output_path: str) -> AssemblyResult:
        """Assemble ``face_paths`` (PX, NX, PY, NY, PZ, NZ) into ``output_path``."""
        face_paths = list(face_paths)
        if len(face_paths) != NUM_FACES:
            raise ValueError(
                f"Expected exactly {NUM_FACES} face paths, got {len(face_paths)}"
            )

        self.state = AssemblerState.IDLE
        self.current_face = None
        try:
            result = self._assemble(face_paths, output_path)
        except BaseException:
            self.state = AssemblerState.FAILED
            raise
        self.state = AssemblerState.DONE
        logger.info(
            "Wrote cube map %s (%d bytes)", output_path, result.bytes_written
        )
        return result

    def _assemble(self, face_paths: List[str], output_path: str) -> AssemblyResult:
        headers: List[DDSHeader] = []
        warnings: List[str] = []
        output_header: Optional[DDSHeader] = None
        out = None
        bytes_written = 0

        try:
            with tqdm(
                enumerate(face_paths),
                total=len(face_paths),
                desc="Cube faces",
                unit="face",
                disable=not self.config.show_progress,
            ) as faces:
                for index, path in faces:
                    face = self._load_face(index, path)
                    headers.append(face.header)

                    if face.expected_mips != face.header.mip_map_count:
                        message = (
                            f"Face #{index} ({face.label}) '{path}': incomplete mipmap "
                            f"level set {face.header.mip_map_count} "
                            f"(expected {face.expected_mips})"
                        )
                        warnings.append(message)
                        if self.config.warn_on_incomplete_mips:
                            logger.warning(message)

                    if face.header.width != face.header.height:
                        raise NotCubemapCompatibleError(
                            index, path, face.header.width, face.header.height
                        )

                    if index == 0:
                        self.state = AssemblerState.WRITING_HEADER
                        output_header = set_complete_cubemap_flag(face.header.copy())
                        out = open_output(output_path)
                        bytes_written += self._write(
                            out, output_path, encode_container_header(output_header)
                        )
                    else:
                        self._check_consistent(face, headers[0])

                    self.state = AssemblerState.APPENDING_PAYLOAD
                    bytes_written += self._write(out, output_path, face.payload)
                    logger.debug(
                        "Appended %d payload bytes from face #%d", len(face.payload), index
                    )

            self.state = AssemblerState.FINALIZING
            self.current_face = None
            self._close(out, output_path)
            out = None
        finally:
            if out is not None:
                try:
                    out.close()
                except OSError as exc:
                    logger.debug("Ignoring close error on failed output %s: %s",
                                 output_path, exc)

        return AssemblyResult(
            output_path=output_path,
            face_headers=headers,
            output_header=output_header,
            bytes_written=bytes_written,
            warnings=warnings,
        )

    def _load_face(self, index: int, path: str) -> FaceFile:
        """Read, decode and validate one face."""
        self.current_face = index
        label = FACE_LABELS[index]

        self.state = AssemblerState.READING
        data = read_face_bytes(path)

        self.state = AssemblerState.DECODING
        try:
            header = decode(data)
        except FormatError as exc:
            raise NotDdsError(index, path, str(exc)) from exc

        self.state = AssemblerState.VALIDATING
        try:
            validate(header)
        except InvalidHeaderError as exc:
            raise InvalidHeaderError(
                exc.field, exc.expected, exc.actual, face_index=index, path=path
            ) from exc

        logger.info("Face #%d (%s) %s", index, label, header.describe())
        return FaceFile(
            index=index,
            label=label,
            path=path,
            data=data,
            header=header,
            expected_mips=expected_mip_count(header.width, header.height),
        )

    @staticmethod
    def _check_consistent(face: FaceFile, first: DDSHeader):
        """Compare a face against face 0 on size and pixel format."""
        header = face.header
        checks = (
            ("width", first.width, header.width),
            ("height", first.height, header.height),
            ("pixel_format.four_cc", first.pixel_format.four_cc, header.pixel_format.four_cc),
        )
        for field, expected, actual in checks:
            if expected != actual:
                raise InconsistentFacesError(face.index, face.path, field, expected, actual)

    @staticmethod
    def _write(out, output_path: str, data) -> int:
        try:
            out.write(data)
        except OSError as exc:
            raise CubemapIOError(
                output_path, f"unable to write result file ({exc.strerror or exc})"
            ) from exc
        return len(data)

    @staticmethod
    def _close(out, output_path: str):
        try:
            out.flush()
            out.close()
        except OSError as exc:
            raise CubemapIOError(
                output_path, f"unable to write result file ({exc.strerror or exc})"
            ) from exc


def assemble_cubemap(face_paths: Sequence[str], output_path: str,
                     config: Optional[CubemapConfig] = None) -> AssemblyResult:
    """Convenience wrapper around :class:`CubemapAssembler`."""
    return CubemapAssembler(config).run(face_paths, output_path)
