import os
import random
import hashlib
import logging
import pytest
from models.digest import Digest
from services.hashing_service import FileHashError, HashingService
from services.sha1_implementations.byte_source import ByteSourceConsistencyError

ABC_WORDS = (0xA9993E36, 0x4706816A, 0xBA3E2571, 0x7850C26C, 0x9CD0D89D)
MILLION_A = "34aa973cd4c4daa4f61eeb2bdbad27316534016f"


class TestHashBytes:

    def test_abc(self, hashing_service):
        """Test the FIPS 180 'abc' vector."""
        assert hashing_service.hash_bytes(b"abc").words == ABC_WORDS

    def test_empty(self, hashing_service):
        """Test the empty message."""
        assert hashing_service.hash_bytes(b"").hexdigest() == "da39a3ee5e6b4b0d3255bfef95601890afd80709"

    def test_million_a(self):
        """Test 'a' repeated 1,000,000 times."""
        assert HashingService().hash_bytes(b"a" * 1_000_000).hexdigest() == MILLION_A

    @pytest.mark.parametrize("length", [0, 1, 54, 55, 56, 57, 63, 64, 65, 118, 119, 120, 121, 127, 128, 129])
    def test_block_boundaries(self, hashing_service, reference_sha1, length):
        """Test lengths around the pad reservation of one and two blocks."""
        data = bytes((7 * i) % 256 for i in range(length))
        assert hashing_service.hash_bytes(data).hexdigest() == reference_sha1(data)

    def test_deterministic(self, hashing_service):
        """Test that repeated calls give identical digests."""
        data = b"repeatable" * 33
        assert hashing_service.hash_bytes(data) == hashing_service.hash_bytes(data)

    def test_returns_digest_model(self, hashing_service):
        """Test that results are Digest instances."""
        assert isinstance(hashing_service.hash_bytes(b"x"), Digest)


class TestHashConcat:

    def test_abc_with_empty_segment(self, hashing_service):
        """Test that ['ab', '', 'c'] hashes like 'abc'."""
        assert hashing_service.hash_concat([b"ab", b"", b"c"]) == hashing_service.hash_bytes(b"abc")

    def test_448_bit_vector(self, hashing_service):
        """Test the two-segment 448-bit vector."""
        digest = hashing_service.hash_concat([b"abcdbcdecdefdefgefghfghig", b"hijhijkijkljklmklmnlmnomnopnopq"])
        assert digest.hexdigest() == "84983e441c3bd26ebaae4aa1f95129e5e54670f1"

    def test_896_bit_vector(self, hashing_service):
        """Test the three-segment 896-bit vector."""
        digest = hashing_service.hash_concat([
            b"abcdefghbcdefghicdefghijdefghijkefghijklfghijklmgh",
            b"ijklmnhijklmnoi",
            b"jklmnopjklmnopqklmnopqrlmnopqrsmnopqrstnopqrstu",
        ])
        assert digest.hexdigest() == "a49b2446a02c645bf419f995b67091253a04a259"

    def test_no_segments_is_empty_message(self, hashing_service):
        """Test that an empty segment list hashes the empty message."""
        assert hashing_service.hash_concat([]) == hashing_service.hash_bytes(b"")

    def test_accepts_generator(self, hashing_service):
        """Test that a one-shot iterable of segments works."""
        digest = hashing_service.hash_concat(part for part in (b"a", b"b", b"c"))
        assert digest.words == ABC_WORDS

    def test_segmentation_invariance_random_splits(self, hashing_service, reference_sha1):
        """Test random contiguous splits, including empty segments, against hashlib."""
        rng = random.Random(1234)
        for _ in range(40):
            data = bytes(rng.randrange(256) for _ in range(rng.randrange(0, 400)))
            cuts = sorted(rng.randrange(len(data) + 1) for _ in range(rng.randrange(0, 8)))
            segments = [data[a:b] for a, b in zip([0] + cuts, cuts + [len(data)])]
            assert b"".join(segments) == data
            assert hashing_service.hash_concat(segments).hexdigest() == reference_sha1(data)

    @pytest.mark.parametrize("segments", [b"abc", "abc", ["abc"], [b"a", 3]])
    def test_rejects_non_bytes_segments(self, hashing_service, segments):
        """Test that text and non bytes-like segments raise TypeError."""
        with pytest.raises(TypeError):
            hashing_service.hash_concat(segments)

    def test_does_not_modify_segments(self, hashing_service):
        """Test that caller buffers are only borrowed."""
        segments = [bytearray(b"ab"), bytearray(b"c")]
        hashing_service.hash_concat(segments)
        assert segments == [bytearray(b"ab"), bytearray(b"c")]
        segments[0].extend(b"z")


class TestHashFile:

    @pytest.mark.parametrize("length", [0, 3, 55, 56, 64, 65, 1000, 70_000])
    def test_matches_hash_bytes(self, hashing_service, write_file, length):
        """Test that hashing a file equals hashing its bytes."""
        data = os.urandom(length)
        path = write_file(data)
        assert hashing_service.hash_file(path) == hashing_service.hash_bytes(data)

    def test_calculate_sha1_hex(self, write_file):
        """Test the hex-string file entry point."""
        path = write_file(b"abc")
        assert HashingService().calculate_sha1(path) == "a9993e364706816aba3e25717850c26c9cd0d89d"

    def test_small_chunk_size(self, write_file):
        """Test a read buffer much smaller than a block."""
        data = b"chunked" * 100
        path = write_file(data)
        assert HashingService(chunk_size=7).hash_file(path).hexdigest() == hashlib.sha1(data).hexdigest()

    def test_missing_file(self, tmp_path, caplog):
        """Test that an unopenable file raises FileHashError with the path."""
        missing = str(tmp_path / "missing.bin")
        with caplog.at_level(logging.ERROR):
            with pytest.raises(FileHashError) as exc_info:
                HashingService().hash_file(missing)
        assert exc_info.value.path == missing
        assert isinstance(exc_info.value.__cause__, FileNotFoundError)
        assert "Cannot open file for hashing" in caplog.text

    def test_directory(self, tmp_path):
        """Test that a directory cannot be hashed."""
        with pytest.raises(FileHashError):
            HashingService().hash_file(str(tmp_path))

    def test_file_handle_closed_after_success(self, mocker, write_file):
        """Test that the file handle is released after hashing."""
        path = write_file(b"abc")
        real_open = open
        handles = []

        def tracking_open(*args, **kwargs):
            f = real_open(*args, **kwargs)
            handles.append(f)
            return f

        mocker.patch("services.hashing_service.open", side_effect=tracking_open, create=True)
        HashingService().hash_file(path)
        assert len(handles) == 1
        assert handles[0].closed

    def test_file_handle_closed_after_fault(self, mocker, write_file):
        """Test that the file handle is released when hashing fails mid-stream."""
        path = write_file(b"x" * 10)
        handles = []
        real_open = open

        def tracking_open(*args, **kwargs):
            f = real_open(*args, **kwargs)
            handles.append(f)
            return f

        mocker.patch("services.hashing_service.open", side_effect=tracking_open, create=True)
        mocker.patch.object(HashingService, "_digest_source", side_effect=ByteSourceConsistencyError("boom"))
        with pytest.raises(ByteSourceConsistencyError):
            HashingService().hash_file(path)
        assert handles[0].closed


class TestHmac:

    def test_jefe(self, hashing_service):
        """Test RFC 2202 case 2."""
        digest = hashing_service.hmac_sha1(b"Jefe", b"what do ya want for nothing?")
        assert digest.hexdigest() == "effcdf6ae5eb2fa2d27416d5f184df9c259a7c79"

    def test_large_key_large_data(self, hashing_service):
        """Test RFC 2202 case 7 with an 80-byte key."""
        digest = hashing_service.hmac_sha1(
            b"\xaa" * 80, b"Test Using Larger Than Block-Size Key and Larger Than One Block-Size Data"
        )
        assert digest.hexdigest() == "e8e99d0f45237d786d6bbaa7965c7808bbff1a91"

    def test_sequence_key(self, hashing_service):
        """Test RFC 2202 case 4 with key 0x01..0x19."""
        digest = hashing_service.hmac_sha1(bytes(range(1, 26)), b"\xcd" * 50)
        assert digest.hexdigest() == "4c9007f4026250c6bc8414f9bf50c86c2d7235da"


class TestFromConfig:

    def test_from_config(self, config):
        """Test that [hashing] settings are applied."""
        service = HashingService.from_config(config)
        assert service.chunk_size == 4096
        assert service.fast_path is True

    def test_from_none_uses_defaults(self):
        """Test defaults when no configuration is loaded."""
        service = HashingService.from_config(None)
        assert service.chunk_size == 1_048_576
        assert service.fast_path is True

    def test_fast_path_disabled(self):
        """Test that fast_path = false is honoured."""
        service = HashingService.from_config({"hashing": {"fast_path": "false"}})
        assert service.fast_path is False

    def test_invalid_chunk_size(self):
        """Test that a non-positive chunk size is rejected."""
        with pytest.raises(ValueError, match="chunk_size"):
            HashingService(chunk_size=0)
