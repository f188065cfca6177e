from lrckit.models import CaptionEntry
from lrckit.parser import LRCParser, parse_lrc, parse_lrc_metadata


def test_parse_sorts_by_timestamp_and_keeps_tie_order():
    raw = "\n".join([
        "[00:10]c",
        "[00:05]b1",
        "[00:00.50]a",
        "[00:05]b2",
        "[00:05.0]b3",
    ])
    entries = parse_lrc(raw)
    assert [e.text for e in entries] == ["a", "b1", "b2", "b3", "c"]
    timestamps = [e.timestamp for e in entries]
    assert timestamps == sorted(timestamps)


def test_fraction_is_optional():
    assert parse_lrc("[01:02]hello") == parse_lrc("[01:02.0]hello")
    assert parse_lrc("[01:02]hello") == [CaptionEntry(timestamp=62.0, text="hello")]


def test_untagged_lines_are_dropped():
    entries = parse_lrc("not a caption line\n[00:05]ok")
    assert entries == [CaptionEntry(timestamp=5.0, text="ok")]


def test_tag_without_text_gives_empty_entry():
    assert parse_lrc("[00:10]") == [CaptionEntry(timestamp=10.0, text="")]


def test_empty_and_whitespace_input():
    assert parse_lrc("") == []
    assert parse_lrc("   \n\t\n") == []
    assert parse_lrc(None) == []


def test_duplicate_timestamps_are_not_merged():
    entries = parse_lrc("[00:01]same\n[00:01]same")
    assert len(entries) == 2


def test_line_break_conventions():
    entries = parse_lrc("[00:01]a\r\n[00:02]b\r[00:03]c\n")
    assert [e.text for e in entries] == ["a", "b", "c"]


def test_text_is_trimmed_and_minutes_have_no_fixed_width():
    entries = parse_lrc("  [123:04.25]   spaced out   ")
    assert len(entries) == 1
    assert abs(entries[0].timestamp - (123 * 60 + 4.25)) < 1e-9
    assert entries[0].text == "spaced out"


def test_metadata_and_malformed_tags_are_dropped():
    raw = "\n".join([
        "[ti:Song Title]",
        "[ar:Someone]",
        "[offset:+250]",
        "[01:2x]bad seconds",
        "[01:23.]missing fraction digits",
        "[:23]missing minutes",
        "[01:23 unterminated",
        "text [00:04]tag not leading",
        "[00:07]kept",
    ])
    assert parse_lrc(raw) == [CaptionEntry(timestamp=7.0, text="kept")]


def test_repeated_tags_stay_in_text_by_default():
    entries = parse_lrc("[00:01][00:05]chorus")
    assert entries == [CaptionEntry(timestamp=1.0, text="[00:05]chorus")]


def test_repeated_tags_can_be_expanded():
    raw = "[00:20]verse\n[00:01][00:30]chorus"
    entries = parse_lrc(raw, expand_repeated_tags=True)
    assert [(e.timestamp, e.text) for e in entries] == [
        (1.0, "chorus"),
        (20.0, "verse"),
        (30.0, "chorus"),
    ]


def test_enhanced_word_tags_are_kept_verbatim():
    entries = parse_lrc("[00:01.00]<00:01.00>hello <00:01.50>world")
    assert entries[0].text == "<00:01.00>hello <00:01.50>world"


def test_parse_metadata():
    raw = "[ti:Song Title]\n[ar: Someone ]\n[00:01]line\n[offset:-100]"
    assert parse_lrc_metadata(raw) == {
        "ti": "Song Title",
        "ar": "Someone",
        "offset": "-100",
    }
    assert parse_lrc_metadata("") == {}


def test_parser_class_reads_file_with_bom(tmp_path):
    lrc_file = tmp_path / "song.lrc"
    lrc_file.write_bytes("\ufeff[00:02]second\n[00:01]first\n".encode("utf-8"))

    entries = LRCParser().parse_file(str(lrc_file))
    assert [e.text for e in entries] == ["first", "second"]


def test_parser_class_policy():
    parser = LRCParser(expand_repeated_tags=True)
    assert len(parser.parse("[00:01][00:02]x")) == 2


def test_huge_minute_values_do_not_raise():
    entries = parse_lrc("[" + "9" * 400 + ":00]far\n[00:01]ok")
    assert [e.text for e in entries] == ["ok", "far"]
    assert entries[1].timestamp == float("inf")

    entries = parse_lrc("[" + "1" * 5000 + ":" + "2" * 5000 + "]x")
    assert len(entries) == 1
    assert entries[0].timestamp == float("inf")


def test_hostile_input_never_raises():
    hostile = [
        "[",
        "[1:",
        "]",
        "[:]",
        "[00:01.]",
        "[" + "0" * 10000,
        "\ud800[00:01]bad surrogate",
        "[00:01]𐏿",
        "\x00[00:02]\x00nul",
        "[\x00:01]",
        "[00:03]" + "x" * 100000,
    ]
    for raw in hostile:
        entries = parse_lrc(raw)
        assert isinstance(entries, list)
        parse_lrc(raw, expand_repeated_tags=True)
        parse_lrc_metadata(raw)

    assert parse_lrc("[00:01]𐏿")[0].text == "𐏿"


def test_only_standard_line_breaks_split_lines():
    entries = parse_lrc("[00:01]a\x0cb\n[00:02]c\x0bd\x1ce")
    assert [e.text for e in entries] == ["a\x0cb", "c\x0bd\x1ce"]
