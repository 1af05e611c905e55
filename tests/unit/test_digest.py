"""Unit tests for digest composition."""

import hashlib

import pytest

from objecthash.core.digest import DIGEST_SIZE, Digest, DigestComposer, digest
from objecthash.core.errors import DepthLimitError
from objecthash.core.models import (
    Bool,
    Dict,
    List,
    Null,
    Number,
    RawBytes,
    Set,
    UnicodeString,
)


def u(text: str) -> UnicodeString:
    return UnicodeString(value=text)


def test_scalar_digest_is_tagged_sha256() -> None:
    """A scalar hashes as SHA-256 over tag plus payload."""
    assert digest(u("foo")).value == hashlib.sha256(b"ufoo").digest()
    assert digest(Null()).value == hashlib.sha256(b"n").digest()
    assert digest(Bool(value=True)).value == hashlib.sha256(b"b1").digest()
    assert digest(Number(value=1.5)).value == hashlib.sha256(b"f+1:011").digest()


def test_list_digest() -> None:
    """Lists hash the concatenated child digests in order."""
    value = List(items=(u("foo"), u("bar")))
    assert digest(value).hex() == "32ae896c413cfdc79eec68be9139c86ded8b279238467c216cf2bec4d5f1e4a2"

    reversed_value = List(items=(u("bar"), u("foo")))
    assert digest(reversed_value) != digest(value)


def test_dict_digest_ignores_entry_order() -> None:
    """Dicts hash the same whatever order their entries come in."""
    a = Dict(entries=(("k1", u("v1")), ("k2", u("v2")), ("k3", u("v3"))))
    b = Dict(entries=(("k2", u("v2")), ("k1", u("v1")), ("k3", u("v3"))))
    expected = "ddd65f1f7568269a30df7cafc26044537dc2f02a1a0d830da61762fc3e687057"
    assert digest(a).hex() == expected
    assert digest(b).hex() == expected


def test_dict_binds_keys_to_values() -> None:
    """Swapping values between keys changes the digest."""
    a = Dict(entries=(("k1", u("v1")), ("k2", u("v2"))))
    b = Dict(entries=(("k1", u("v2")), ("k2", u("v1"))))
    assert digest(a) != digest(b)


def test_set_digest() -> None:
    """Sets hash their sorted, deduplicated member digests."""
    value = Set(members=(u("foo"), u("bar")))
    assert digest(value).hex() == "1d572df95be4d038068133b6a162cbe2172f15bc7d8a020faca7a9a93e8a2649"
    assert digest(Set(members=(u("bar"), u("foo"), u("bar")))) == digest(value)


def test_set_members_deduplicate_by_digest() -> None:
    """Members that hash alike count once."""
    single = Set(members=(u("foo"),))
    repeated = Set(members=(u("foo"), u("foo"), u("foo")))
    assert digest(single).hex() == "a4fef47742c80337b2eb0dcc6ed36610c93aca0afef86a65f381020b9de2284d"
    assert digest(repeated) == digest(single)


def test_nested_sets() -> None:
    """Sets of sets deduplicate at every level."""
    a = Set(members=(u("foo"), Number(value=23.6), Set(members=(Set(),)), Set(members=(Set(members=(Number(value=1.0),)),))))
    b = Set(members=a.members + (Set(members=(Set(),)),))
    assert digest(a) == digest(b)


def test_empty_containers_do_not_collide() -> None:
    """Type tags keep empty values of different kinds apart."""
    digests = {
        digest(List()),
        digest(u("")),
        digest(Set()),
        digest(Dict()),
        digest(Null()),
        digest(RawBytes(value=b"")),
    }
    assert len(digests) == 6
    assert digest(List()).hex() == "acac86c0e609ca906f632b0e2dacccb2b77d22b0621f20ebece1a4835b93f6f0"
    assert digest(Dict()).hex() == "18ac3e7343f016890c510e93f935261169d9e3f565436429830faf0934f4f8e4"
    assert digest(Set()).hex() == "043a718774c572bd8a25adbeb1bfcd5c0256ae11cecf9f9c3f925d0e52beaf89"


def test_raw_bytes_differ_from_text() -> None:
    """The same bytes as text and as raw bytes hash differently."""
    assert digest(RawBytes(value=b"foo")) != digest(u("foo"))
    assert digest(RawBytes(value=b"\x00\x01")).hex() == "4b2ef4bb2adb559b4623d0e1680529e84554439a68197241d568c52c8147d6de"


def test_depth_limit() -> None:
    """Values nested past the limit raise a distinct error."""
    value = Null()
    for _ in range(5):
        value = List(items=(value,))

    assert DigestComposer(max_depth=5).digest(value) == digest(value)
    with pytest.raises(DepthLimitError):
        DigestComposer(max_depth=4).digest(value)
    with pytest.raises(DepthLimitError):
        digest(value, max_depth=3)


def test_stack_exhaustion_is_a_depth_error() -> None:
    """Nesting that exhausts the stack under a generous limit is a depth error."""
    value = Null()
    for _ in range(5000):
        value = List(items=(value,))

    with pytest.raises(DepthLimitError):
        DigestComposer(max_depth=100000).digest(value)
    with pytest.raises(DepthLimitError):
        digest(value, max_depth=100000)


def test_digest_rejects_native_values() -> None:
    """Native values must be classified before digesting."""
    with pytest.raises(TypeError, match="to_common_value"):
        digest(["foo"])


def test_digest_type() -> None:
    """Digests are 32 bytes, rendered as lowercase hex."""
    d = digest(u("foo"))
    assert len(bytes(d)) == DIGEST_SIZE
    assert str(d) == d.hex() == d.hex().lower()
    assert len(d.hex()) == 64
    assert Digest.fromhex(d.hex()) == d

    with pytest.raises(ValueError):
        Digest(b"short")


def test_digests_order_by_bytes() -> None:
    """Sorting digests sorts their raw bytes."""
    low = Digest(b"\x00" * 32)
    high = Digest(b"\xff" * 32)
    assert sorted([high, low]) == [low, high]
