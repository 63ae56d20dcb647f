# pixelsreader

Building blocks for reading columnar data laid out in the Pixels storage
format: column vectors, row batches, column-chunk readers and the bit-level
encoding helpers they rely on. Pure Python, no third-party dependencies.

## Contents

- `pixelsreader.schema`: `Category` (the column type kinds) and
  `TypeDescription` (category, precision, scale, children, field names;
  `is_short_decimal()` is true for decimals of precision 18 or less).
- `pixelsreader.column_vector`: `ColumnVector` and its subclasses
  `ByteColumnVector`, `BinaryColumnVector`, `LongColumnVector`,
  `DateColumnVector`, `DecimalColumnVector` and `TimestampColumnVector`.
  Each keeps null flags, a validity bitmap and read/write positions.
  `resize` may only shrink a vector; `ensure_size` grows it.
  `DecimalColumnVector` picks a `PhysicalType` (INT16, INT32, INT64, INT128)
  from the precision and rejects precisions above 38. Unsupported operations
  raise `InvalidArgumentError`.
- `pixelsreader.row_batch`: `VectorizedRowBatch`, a group of column vectors
  with a row count, a read cursor and a maximum size (default 1024). It can
  be used as a context manager that closes it on exit.
- `pixelsreader.column_reader`: `ChunkBuffer` (a little-endian byte reader
  over a column chunk), `ColumnEncoding`, `EncodingKind`, `ColumnChunkIndex`,
  and the readers `IntegerColumnReader`, `DateColumnReader`,
  `TimestampColumnReader` and `DecimalColumnReader`.
- `pixelsreader.string_reader`: `StringColumnReader` with its subclasses
  `CharColumnReader` and `VarcharColumnReader`, for plain and dictionary
  encoded string chunks. Strings are stored as views into the chunk bytes.
- `pixelsreader.reader_builder`: `new_column_reader(type_, decoder_factory)`
  returns the reader for SHORT, INT, LONG, DATE, TIMESTAMP, VARCHAR, CHAR and
  short DECIMAL columns, and raises `InvalidArgumentError` for anything else.
- `pixelsreader.bit_unpack`: `FixedBitSizes`, `decode_bit_width`,
  `unrolled_unpack` and `read_long_be`.
- `pixelsreader.bit_pack`: `encode_bit_width`, `get_closest_fixed_bits`,
  `unrolled_bit_pack`, and `write_int_le`, `write_long_le`, `write_int_be`,
  `write_long_be`, which write to a `bytearray` or a binary stream.
- `pixelsreader.bit_utils`: `ByteOrder` and `bit_wise_compact`,
  `bit_wise_compact_le`, `bit_wise_compact_be` for packing booleans into bits.
- `pixelsreader.dynamic_int_array`: `DynamicIntArray`, a growable integer
  array stored in fixed-size chunks.
- `pixelsreader.stats_recorder`: `ColumnStatistic`, `StatsRecorder` (counts
  values and tracks nulls; typed `update_*` calls raise
  `UnsupportedUpdateError`) and `create_stats_recorder`.
- `pixelsreader.reader_option`: `ReaderOption`, a dataclass of read settings;
  `rg_len` of -1 means reading to the end of the file.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Examples

Reading a plain-encoded INT column chunk:

```python
import struct

from pixelsreader.column_reader import ChunkBuffer, ColumnChunkIndex, ColumnEncoding
from pixelsreader.column_vector import LongColumnVector
from pixelsreader.reader_builder import new_column_reader
from pixelsreader.schema import Category, TypeDescription
from pixelsreader.stats_recorder import ColumnStatistic

reader = new_column_reader(TypeDescription(Category.INT))
chunk = ChunkBuffer(struct.pack("<3i", 1, -2, 3))
index = ColumnChunkIndex(pixel_statistics=[ColumnStatistic(has_null=False)])
vector = LongColumnVector(3, is_long=False)

reader.read(chunk, ColumnEncoding(), 0, 3, 10, 0, vector, index)
print(list(vector.int_vector))  # [1, -2, 3]
```

Utilities:

```python
from pixelsreader.bit_utils import ByteOrder, bit_wise_compact
from pixelsreader.dynamic_int_array import DynamicIntArray
from pixelsreader.row_batch import VectorizedRowBatch

packed = bit_wise_compact([True, False, True], 3, ByteOrder.LITTLE_ENDIAN)

arr = DynamicIntArray(1024)
arr.append(7)
arr[3] = 9
print(len(arr), str(arr))  # 4 {7,0,0,9}

with VectorizedRowBatch(2, 1024) as batch:
    print(batch.is_empty(), batch.free_slots())  # True 1024
```

## What this package does not do

- It does not open or parse Pixels files: there is no reading of the post
  script, file footer or row-group footers, and no record reader that walks
  row groups and fills row batches. Callers supply the column chunk bytes and
  a `ColumnChunkIndex` themselves.
- It has no run-length decoder. Readers handle run-length encoded chunks only
  through a `decoder_factory` passed in by the caller (a callable taking a
  `ChunkBuffer` and a signed flag and returning an object with `next()` and
  `has_next()`); without one they raise `InvalidArgumentError`.
- It has no filter push-down evaluation; readers only honour a given
  `filter_mask`.
- There is no command-line tool.