"""Tests for artist/album parsing from archive filenames."""

import pytest
from bandcamp_expand.common import FilenameFormatError
from bandcamp_expand.naming import (
    AlbumIdentity,
    get_album_from_filename,
    get_artist_from_filename,
    parse_album_identity,
)


class TestArtist:
    """Tests for get_artist_from_filename."""

    def test_basic(self):
        assert get_artist_from_filename("Psycroptic - As the Kingdom Drowns (pre-order).zip") == "Psycroptic"

    def test_first_separator_wins(self):
        assert get_artist_from_filename("Mono - Hymn to the Immortal Wind - Live.zip") == "Mono"

    def test_hyphenated_artist_without_spaces(self):
        assert get_artist_from_filename("Jay-Z - The Blueprint.zip") == "Jay-Z"

    def test_missing_separator(self):
        with pytest.raises(FilenameFormatError) as exc_info:
            get_artist_from_filename("Psycroptic-As the Kingdom Drowns.zip")
        assert exc_info.value.context["filename"] == "Psycroptic-As the Kingdom Drowns.zip"


class TestAlbum:
    """Tests for get_album_from_filename."""

    def test_basic(self):
        album = get_album_from_filename("Psycroptic - As the Kingdom Drowns (pre-order).zip")
        assert album == "As the Kingdom Drowns (pre-order)"

    def test_single_digit_counter_stripped(self):
        album = get_album_from_filename("Psycroptic - As the Kingdom Drowns (pre-order) (1).zip")
        assert album == "As the Kingdom Drowns (pre-order)"

    @pytest.mark.parametrize("digit", "0123456789")
    def test_every_digit_counter_stripped(self, digit):
        assert get_album_from_filename(f"A - B ({digit}).zip") == "B"

    def test_multi_digit_counter_kept(self):
        album = get_album_from_filename("Psycroptic - As the Kingdom Drowns (pre-order) (10).zip")
        assert album == "As the Kingdom Drowns (pre-order) (10)"

    def test_non_digit_parenthetical_kept(self):
        assert get_album_from_filename("Artist - Album (x).zip") == "Album (x)"

    def test_non_ascii_digit_kept(self):
        # Arabic-Indic digit one
        assert get_album_from_filename("Artist - Album (١).zip") == "Album (١)"

    def test_later_separators_stay_in_album(self):
        album = get_album_from_filename("Mono - Hymn to the Immortal Wind - Live.zip")
        assert album == "Hymn to the Immortal Wind - Live"

    def test_no_normalisation(self):
        album = get_album_from_filename("artist - ALBUM  with   spaces!.zip")
        assert album == "ALBUM  with   spaces!"

    def test_short_album(self):
        assert get_album_from_filename("A - B.zip") == "B"

    def test_missing_separator(self):
        with pytest.raises(FilenameFormatError):
            get_album_from_filename("no separator here.zip")


class TestParseAlbumIdentity:
    """Tests for parse_album_identity."""

    def test_identity(self):
        identity = parse_album_identity("Psycroptic - As the Kingdom Drowns (pre-order) (1).zip")
        assert identity == AlbumIdentity(artist="Psycroptic", album="As the Kingdom Drowns (pre-order)")

    @pytest.mark.parametrize("filename", [
        " - Album.zip",
        "Artist - .zip",
        ".. - Album.zip",
        "Artist - ...zip",
    ])
    def test_rejects_unusable_directory_names(self, filename):
        with pytest.raises(FilenameFormatError):
            parse_album_identity(filename)
