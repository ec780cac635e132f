import pytest

from nrdp_reporter.services.data_size import format_data_size, parse_data_size


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("0 B", 0),
        ("512 B", 512),
        ("1 KB", 1024),
        ("10MB", 10 * 1024 ** 2),
        ("1.5 gb", 1.5 * 1024 ** 3),
        (" 2 TB ", 2 * 1024 ** 4),
    ],
)
def test_parse_data_size(raw, expected):
    assert parse_data_size(raw) == expected


@pytest.mark.parametrize("raw", ["", "MB", "10 PB", "-1 KB", "ten MB"])
def test_parse_data_size_rejects_garbage(raw):
    with pytest.raises(ValueError):
        parse_data_size(raw)


@pytest.mark.parametrize(
    "size, expected",
    [
        (0, "0 bytes"),
        (512, "512 bytes"),
        (1024, "1,024 bytes"),
        (1536, "1.5 KB"),
        (13002342, "12.4 MB"),
        (3 * 1024 ** 3, "3 GB"),
        (int(1.25 * 1024 ** 4), "1.25 TB"),
    ],
)
def test_format_data_size(size, expected):
    assert format_data_size(size) == expected
