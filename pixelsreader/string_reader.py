"""Readers of string columns, plain or dictionary encoded."""

from __future__ import annotations

from collections.abc import Sequence

from .column_reader import (
    ChunkBuffer,
    ColumnChunkIndex,
    ColumnEncoding,
    ColumnReader,
    EncodingKind,
)
from .column_vector import BinaryColumnVector, InvalidArgumentError

__all__ = ["StringColumnReader", "CharColumnReader", "VarcharColumnReader"]


def _selected(filter_mask: Sequence[bool] | None, index: int) -> bool:
    return filter_mask is None or bool(filter_mask[index])


class StringColumnReader(ColumnReader):
    """Reads strings as views into the chunk's content bytes.

    A plain chunk holds the content, then the start offsets, and ends with
    the offset of the starts. A dictionary chunk holds the ids, the
    dictionary content and the dictionary starts, and ends with the offsets
    of the dictionary content and of the starts.
    """

    def __init__(self, type_, decoder_factory=None) -> None:
        super().__init__(type_, decoder_factory)
        self.buffer_offset = 0
        self.current_start = 0
        self.next_start = 0
        self.content_buf: ChunkBuffer | None = None
        self.dict_content_buf: ChunkBuffer | None = None
        self.starts_buf: ChunkBuffer | None = None
        self.content_decoder = None
        self.dict_content_offset = 0
        self.dict_starts_offset = 0
        self.dict_starts: list[int] = []
        self.starts_length = 0

    def read(
        self,
        input: ChunkBuffer,
        encoding: ColumnEncoding,
        offset: int,
        size: int,
        pixel_stride: int,
        vector_index: int,
        vector: BinaryColumnVector,
        chunk_index: ColumnChunkIndex,
        filter_mask: Sequence[bool] | None = None,
    ) -> None:
        """Read ``size`` strings; rows whose ``filter_mask`` entry is false stay unset."""
        super().read(
            input, encoding, offset, size, pixel_stride, vector_index,
            vector, chunk_index, filter_mask,
        )

    def _start(self, input, encoding, chunk_index) -> None:
        super()._start(input, encoding, chunk_index)
        self.buffer_offset = 0
        self.read_content(input, input.remaining(), encoding)

    def read_content(
        self, input: ChunkBuffer, input_length: int, encoding: ColumnEncoding
    ) -> None:
        """Locate the content and starts sections of the chunk."""
        if encoding.kind is EncodingKind.DICTIONARY:
            self._read_dictionary_content(input, input_length, encoding)
            return
        input.mark()
        input.skip(input_length - 4)
        starts_offset = input.read_int()
        input.reset_to_mark()
        self.content_buf = input.slice(0, starts_offset)
        self.starts_buf = input.slice(starts_offset, input_length - 4 - starts_offset)
        self.next_start = self.starts_buf.read_int()

    def _read_dictionary_content(
        self, input: ChunkBuffer, input_length: int, encoding: ColumnEncoding
    ) -> None:
        input.mark()
        input.skip(input_length - 8)
        self.dict_content_offset = input.read_int()
        self.dict_starts_offset = input.read_int()
        input.reset_to_mark()
        self.content_buf = input.slice(0, self.dict_content_offset)
        self.dict_content_buf = input.slice(
            self.dict_content_offset,
            self.dict_starts_offset - self.dict_content_offset,
        )
        starts_buf_length = input_length - self.dict_starts_offset - 8
        self.starts_buf = input.slice(self.dict_starts_offset, starts_buf_length)

        if encoding.cascades_run_length:
            if encoding.dictionary_size is None:
                raise InvalidArgumentError(
                    "StringColumnReader::readContent: dictionary size must be defined."
                )
            starts_decoder = self._new_decoder(self.starts_buf, False)
            if starts_decoder is None:
                raise InvalidArgumentError(
                    "run-length encoded data needs a decoder factory"
                )
            self.starts_length = encoding.dictionary_size + 1
            self.dict_starts = []
            while starts_decoder.has_next():
                self.dict_starts.append(int(starts_decoder.next()))
            self.content_decoder = self._new_decoder(self.content_buf, False)
            return

        if starts_buf_length % 4:
            raise InvalidArgumentError(
                "StringColumnReader::readContent: the length of the starts "
                "array buffer is invalid. "
            )
        starts_size = starts_buf_length // 4
        if (
            encoding.dictionary_size is not None
            and encoding.dictionary_size + 1 != starts_size
        ):
            raise InvalidArgumentError(
                "the dictionary size is inconsistent with the size of the starts array"
            )
        self.starts_length = starts_size
        self.dict_starts = [self.starts_buf.read_int() for _ in range(starts_size)]
        self.content_decoder = None

    def _read_values(
        self, input, encoding, size, pixel_stride, vector_index,
        vector: BinaryColumnVector, chunk_index, filter_mask,
    ) -> None:
        if encoding.kind is EncodingKind.DICTIONARY:
            self._read_dictionary(
                size, vector_index, vector, encoding, chunk_index, filter_mask
            )
        else:
            self._read_plain(size, vector_index, vector, filter_mask)

    def _next_id(self, cascade: bool) -> int:
        return int(self.content_decoder.next()) if cascade else self.content_buf.read_int()

    def _read_dictionary(
        self, size, vector_index, vector, encoding, chunk_index, filter_mask
    ) -> None:
        cascade = encoding.cascades_run_length
        for i in range(size):
            if vector.check_valid(i) and _selected(filter_mask, i):
                origin_id = self._next_id(cascade)
                start = self.dict_starts[origin_id]
                length = self.dict_starts[origin_id + 1] - start
                vector.set_ref(i + vector_index, self.dict_content_buf.data, start, length)
            else:
                # Null and filtered-out rows still occupy an id in the chunk.
                self._next_id(cascade)
            self.element_index += 1

    def _advance_start(self) -> int:
        self.current_start = self.next_start
        self.next_start = self.starts_buf.read_int()
        return self.next_start - self.current_start

    def _read_plain(self, size, vector_index, vector, filter_mask) -> None:
        for i in range(size):
            valid = vector.check_valid(i)
            length = self._advance_start()
            if valid and _selected(filter_mask, i):
                vector.set_ref(
                    i + vector_index, self.content_buf.data, self.buffer_offset, length
                )
                self.buffer_offset += length
            elif valid:
                self.buffer_offset += length
            self.element_index += 1

    def close(self) -> None:
        super().close()
        self.content_buf = None
        self.dict_content_buf = None
        self.starts_buf = None
        self.content_decoder = None
        self.dict_starts = []


class CharColumnReader(StringColumnReader):
    """Reader of fixed-length character columns."""


class VarcharColumnReader(StringColumnReader):
    """Reader of variable-length character columns."""