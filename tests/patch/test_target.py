import pytest

from ztpatch.target import UNKNOWN_TARGET_NAME, normalize_comment, normalize_target_name


@pytest.mark.parametrize(
    "value,expected",
    [
        ("my patch file!!.longext", "MYPATCH~1.LON"),
        ("game.exe", "GAME.EXE"),
        ("Save Data.bin", "SAVEDATA.BIN"),
        ("ninechars.dat", "NINECHARS.DAT"),
        ("tenchars10.dat", "TENCHAR~1.DAT"),
        ("README", "README"),
        ("archive.tar.gz", "ARCHIVE~1.GZ"),
        ("dir/file.txt", "DIRFILE.TXT"),
        ("café.rom", "CAF.ROM"),
        (UNKNOWN_TARGET_NAME, UNKNOWN_TARGET_NAME),
    ],
)
def test_target_name(value, expected):
    assert normalize_target_name(value) == expected


@pytest.mark.parametrize("value", [None, "", "   ", "!!!", ".ext", "éè.txt"])
def test_target_name_unknown(value):
    assert normalize_target_name(value) == UNKNOWN_TARGET_NAME


def test_target_name_limits():
    for value in ["a" * 40, "b" * 40 + "." + "c" * 40, "x.y", "name.e"]:
        result = normalize_target_name(value)
        assert len(result.encode("ascii")) <= 13
        assert result == result.upper()
        name, _, ext = result.partition(".")
        assert len(name) <= 9
        assert len(ext) <= 3


def test_comment():
    assert normalize_comment(None) is None
    assert normalize_comment("") is None
    assert normalize_comment(" \t\r\n") is None
    assert normalize_comment("Infinite lives") == "Infinite lives"
    assert normalize_comment("  padded  ") == "  padded  "
    assert normalize_comment("über ☃") == "über ☃"
