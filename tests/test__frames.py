from io import BytesIO

from hypothesis import given, strategies as st

from id3edit import Frame, read_frame, write_frame, TruncatedStreamError, \
    EncodingRangeError
from tests import TestCase, make_frame


frame_ids = st.binary(min_size=4, max_size=4)


class TFrame(TestCase):

    def test_size_follows_data(self):
        frame = Frame(b"TIT2", b"\x00abc")
        self.assertEqual(frame.size, 4)
        frame.data = b""
        self.assertEqual(frame.size, 0)

    def test_bad_id(self):
        self.assertRaises(ValueError, Frame, b"TIT")
        self.assertRaises(ValueError, Frame, b"TIT22")

    def test_frame_id(self):
        self.assertEqual(Frame(b"TPE1").FrameID, "TPE1")

    def test_is_padding(self):
        self.assertTrue(Frame(b"\x00\x00\x00\x00").is_padding)
        self.assertFalse(Frame(b"TIT\x00").is_padding)

    def test_flags(self):
        frame = Frame(b"TIT2", flags=0x0080)
        self.assertTrue(frame.f_compressed)
        self.assertFalse(frame.f_encrypted)
        frame.flags = 0x2040
        self.assertFalse(frame.f_compressed)
        self.assertTrue(frame.f_encrypted)

    def test_from_header(self):
        frame, size = Frame.from_header(
            b"TALB\x00\x00\x01\x00\x80\x40")
        self.assertEqual(frame.id, b"TALB")
        self.assertEqual(size, 256)
        self.assertEqual(frame.flags, 0x8040)
        self.assertEqual(frame.data, b"")

    def test_from_header_short(self):
        self.assertRaises(
            TruncatedStreamError, Frame.from_header, b"TALB\x00")

    def test_header_bytes(self):
        frame = Frame(b"TALB", b"x" * 300, flags=0x0020)
        self.assertEqual(
            frame.header_bytes(), b"TALB\x00\x00\x01\x2c\x00\x20")

    def test_header_bytes_flags_too_large(self):
        frame = Frame(b"TALB", b"x", flags=0x10000)
        self.assertRaises(EncodingRangeError, frame.header_bytes)

    def test_size_not_synchsafe(self):
        # 0x80 would be invalid in a synchsafe integer
        data = make_frame(b"COMM", b"x" * 0x80)
        self.assertEqual(data[4:8], b"\x00\x00\x00\x80")
        self.assertEqual(read_frame(BytesIO(data)).size, 0x80)

    def test_eq(self):
        self.assertReallyEqual(Frame(b"TIT2", b"a"), Frame(b"TIT2", b"a"))
        self.assertNotEqual(Frame(b"TIT2", b"a"), Frame(b"TIT2", b"b"))
        self.assertNotEqual(
            Frame(b"TIT2", b"a"), Frame(b"TIT2", b"a", flags=1))
        self.assertNotEqual(Frame(b"TIT2", b"a"), b"TIT2")

    def test_repr(self):
        self.assertEqual(
            repr(Frame(b"TIT2", b"\x00a")),
            "Frame(b'TIT2', b'\\x00a', flags=0x0000)")

    def test_render(self):
        self.assertEqual(Frame(b"TIT2", b"\x00Title").render(), u"Title")
        self.assertEqual(Frame(b"APIC", b"\x00\x89PNG").render(), u"image")

    def test_pprint(self):
        self.assertEqual(Frame(b"TPE1", b"\x00Artist").pprint(),
                         u"TPE1=Artist")


class Tread_frame(TestCase):

    def test_read(self):
        fileobj = BytesIO(make_frame(b"TIT2", b"\x00Hello", 0x4000) + b"xx")
        frame = read_frame(fileobj)
        self.assertEqual(frame.id, b"TIT2")
        self.assertEqual(frame.data, b"\x00Hello")
        self.assertEqual(frame.flags, 0x4000)
        self.assertEqual(fileobj.read(), b"xx")

    def test_empty_payload(self):
        frame = read_frame(BytesIO(make_frame(b"TIT2", b"")))
        self.assertEqual(frame.data, b"")

    def test_truncated_payload(self):
        data = make_frame(b"TIT2", b"\x00Hello")[:-1]
        self.assertRaises(TruncatedStreamError, read_frame, BytesIO(data))

    def test_truncated_header(self):
        self.assertRaises(
            TruncatedStreamError, read_frame, BytesIO(b"TIT2\x00\x00"))
        self.assertRaises(TruncatedStreamError, read_frame, BytesIO(b""))


class Twrite_frame(TestCase):

    def test_write(self):
        fileobj = BytesIO()
        write_frame(Frame(b"TPE1", b"\x00Artist"), fileobj)
        self.assertEqual(
            fileobj.getvalue(),
            b"TPE1\x00\x00\x00\x07\x00\x00\x00Artist")

    def test_roundtrip_keeps_flags_and_payload(self):
        data = make_frame(b"APIC", b"\x00image/png\x00\x03\x00\x89PNG", 0xE0)
        fileobj = BytesIO()
        write_frame(read_frame(BytesIO(data)), fileobj)
        self.assertEqual(fileobj.getvalue(), data)

    @given(frame_ids, st.binary(max_size=300),
           st.integers(min_value=0, max_value=0xFFFF))
    def test_roundtrip(self, frame_id, payload, flags):
        data = make_frame(frame_id, payload, flags)
        fileobj = BytesIO()
        write_frame(read_frame(BytesIO(data)), fileobj)
        self.assertEqual(fileobj.getvalue(), data)
