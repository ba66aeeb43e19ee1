# eplayout

The output side of a media player: building MPEG PES headers, small AAC and
byte helpers, routing output commands to audio, video and subtitle outputs,
and turning subtitle packets into JSON event lines.

## Modules

- **`eplayout.bits`**: `BitPacker` packs MSB-first bit fields into bytes
  (`put_bits`, `flush`, `getvalue`). `read_uint32` and `read_uint16` read
  big-endian integers and raise `ValueError` on short input. `get_extension`
  returns the text after the last dot of a name, or `None`. `INVALID_PTS_VALUE`
  marks "no timestamp".
- **`eplayout.pes`**: `insert_pes_header(size, stream_id, pts, pic_start_code)`
  returns a PES header as bytes, with an optional 33-bit PTS and an optional
  picture start code; a size that does not fit the 16-bit length field is
  written as 0. `insert_video_private_data_header(payload_size)` builds the
  9-byte private data header. `update_pes_header_payload_size(data, size)`
  rewrites the length field of a `bytearray` in place. Stream-id constants
  such as `MPEG_VIDEO_PES_START_CODE` are defined here.
- **`eplayout.aac`**: `has_adts_header(data)` tells whether a buffer is one
  ADTS frame whose length field matches its size. `aac_sample_rate_index`
  maps a sample rate to the AAC frequency index (13 below 7350 Hz).
- **`eplayout.metadata`**: `map_tag` maps an ID3v2 frame id such as `TIT2`
  to a player tag such as `Title`; `tags_for` returns the list of frame ids for
  a tag. The full table is `METADATA_MAP`.
- **`eplayout.writer`**: `write_ext(call, fd, data)` sends one buffer through
  a writev-style callable. `flush_pipe(fd)` drains a non-blocking pipe and
  returns how many bytes it discarded.
- **`eplayout.output`**: `OutputCommand` lists the commands. `Output` is the
  base class for an output, named by its capabilities (`"audio"`, `"video"`,
  `"subtitle"`). `OutputHandler` selects an output per port (`add`, `delete`,
  `capabilities`) and its `command` forwards a command to the outputs that the
  `PlaybackState` flags of a `Context` say are in use. Failures raise
  `OutputError`.
- **`eplayout.subtitle`**: `SubtitleOutput` is an `Output` that sends SubRip,
  WebVTT, ASS and MOV text packets (`SubtitlePacket`) as JSON lines to a send
  callable (standard output by default) and hands PGS, DVB and XSUB packets to
  a graphic writer that you supply. `subtitle_codec_id`, `ass_get_text`,
  `mov_get_text` and `json_string_escape` can be used on their own.

## Installation

```
pip install .
```

Only the Python standard library is needed, version 3.10 or later.

## Examples

A PES header for a 100-byte payload with a PTS:

```python
from eplayout.pes import insert_pes_header

header = insert_pes_header(100, 0xE0, 90000, 0)
assert header[:4] == b"\x00\x00\x01\xe0"
assert len(header) == 14
```

AAC helpers:

```python
from eplayout.aac import has_adts_header, aac_sample_rate_index

aac_sample_rate_index(44100)   # 4
has_adts_header(b"\x00" * 7)   # False
```

Metadata tags:

```python
from eplayout.metadata import map_tag, tags_for

map_tag("TIT2")      # "Title"
tags_for("Artist")   # ["TPE1", "TP1"]
```

Subtitle text:

```python
from eplayout.subtitle import ass_get_text, json_string_escape

ass_get_text("91,0,Default,,0,0,0,,first\\Nsecond")   # "first\\nsecond"
json_string_escape('say "hi"')                         # 'say \\"hi\\"'
```

## What it does not do

The package contains no audio or video output of its own: nothing here opens
a decoder device or plays a stream. `OutputHandler` only routes commands to
`Output` objects that you register, and the only concrete output it ships is
`SubtitleOutput`. There is no demuxer, track manager or graphic subtitle
renderer; `SubtitleOutput.write` expects `context.manager.subtitle` to provide
`current_track_id()` and `current_encoding()`, and graphic subtitles need a
writer passed in. There is no command-line program.

## Running the tests

```
pip install .[test]
pytest
```