"""
Tests for the command line runner.
"""
import json
import pandas as pd
import pytest
from geohash_index.core.codec import string_to_packed_long
from geohash_index.runner import build_parser, main


def _run(capsys, argv):
    code = main(argv)
    return code, capsys.readouterr().out


class TestParser:
    """Tests for argument parsing."""

    def test_command_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_unknown_direction(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(['adjacent', 'dr', 'up'])

    def test_hex_packed_value(self):
        args = build_parser().parse_args(['packed', '0x1'])
        assert args.value == 1


class TestCommands:
    """Tests for each sub-command."""

    def test_encode(self, capsys):
        code, out = _run(capsys, ['encode', '40.7571397', '-73.9891705', '--length', '5'])
        payload = json.loads(out)

        assert code == 0
        assert payload['geohash'] == "dr5ru"
        assert payload['packed'] == string_to_packed_long("dr5ru")

    def test_encode_uses_configured_length(self, capsys):
        code, out = _run(capsys, ['encode', '40.7571397', '-73.9891705'])
        assert code == 0
        assert len(json.loads(out)['geohash']) == 12

    def test_encode_long_hash_has_no_packed_form(self, capsys):
        code, out = _run(capsys, ['encode', '40.7571397', '-73.9891705', '--length', '15'])
        payload = json.loads(out)
        assert code == 0
        assert 'packed' not in payload

    def test_encode_zero_length_is_an_error(self, capsys):
        """An explicit --length 0 is rejected, not replaced by the configured default."""
        code, out = _run(capsys, ['encode', '40.7571397', '-73.9891705', '--length', '0'])
        assert code == 1
        assert out == ""

    def test_encode_invalid_latitude(self, capsys):
        code, out = _run(capsys, ['encode', '91', '0'])
        assert code == 1
        assert out == ""

    def test_decode(self, capsys):
        code, out = _run(capsys, ['decode', 's1'])
        payload = json.loads(out)

        assert code == 0
        assert payload['bounds'] == {
            'min_lat': 5.625, 'max_lat': 11.25, 'min_lon': 0.0, 'max_lon': 11.25,
        }

    def test_decode_invalid(self, capsys):
        code, _ = _run(capsys, ['decode', 'dra'])
        assert code == 1

    def test_packed(self, capsys):
        value = str(string_to_packed_long("dr"))
        code, out = _run(capsys, ['packed', value])
        assert code == 0
        assert json.loads(out)['geohash'] == "dr"

    def test_adjacent_compass_name(self, capsys):
        code, out = _run(capsys, ['adjacent', 'dr', 'east'])
        payload = json.loads(out)

        assert code == 0
        assert payload['adjacent'] == "dx"
        assert payload['direction'] == "right"

    def test_adjacent_steps(self, capsys):
        code, out = _run(capsys, ['adjacent', 'dr', 'right', '--steps', '2'])
        assert json.loads(out)['adjacent'] == "dz"

    def test_neighbours(self, capsys):
        code, out = _run(capsys, ['neighbours', 'dr'])
        payload = json.loads(out)['neighbours']

        assert code == 0
        assert payload['left'] == "dp"
        assert payload['right_bottom'] == "dw"

    def test_cover(self, capsys):
        code, out = _run(capsys, ['cover', '10', '0', '0', '10'])
        payload = json.loads(out)

        assert code == 0
        assert payload['hashes'] == ["s0", "s1"]
        assert payload['hash_length'] == 2

    def test_cover_fixed_length(self, capsys):
        code, out = _run(capsys, ['cover', '10', '0', '0', '10', '--length', '1'])
        assert json.loads(out)['hashes'] == ["s"]

    def test_cover_zero_budget_is_an_error(self, capsys):
        code, out = _run(capsys, ['cover', '10', '0', '0', '10', '--max-hashes', '0'])
        assert code == 1
        assert out == ""

    def test_cover_inverted_box(self, capsys):
        code, _ = _run(capsys, ['cover', '0', '0', '10', '10'])
        assert code == 1

    def test_grid(self, capsys):
        code, out = _run(capsys, ['grid', 'dr', '--highlight', 'f2'])
        assert code == 0
        assert out == "f0 F2 f8 \ndp dr dx \ndn dq dw \n"

    def test_config_file(self, capsys, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("codec:\n  default_length: 4\n")

        code, out = _run(capsys, ['--config', str(config_file), 'encode', '40.7571397', '-73.9891705'])
        assert code == 0
        assert json.loads(out)['geohash'] == "dr5r"


class TestBatch:
    """Tests for the batch sub-command."""

    def test_writes_hash_column(self, capsys, tmp_path):
        source = tmp_path / "points.csv"
        target = tmp_path / "out" / "hashed.csv"
        pd.DataFrame({
            'latitude': [40.7571397, 57.64911],
            'longitude': [-73.9891705, 10.40744],
        }).to_csv(source, index=False)

        code, out = _run(capsys, [
            'batch', '--input', str(source), '--output', str(target), '--length', '5',
        ])

        assert code == 0
        assert json.loads(out)['rows'] == 2
        written = pd.read_csv(target)
        assert written['geohash'].tolist() == ["dr5ru", "u4pru"]

    def test_zero_length_is_an_error(self, capsys, tmp_path):
        source = tmp_path / "points.csv"
        pd.DataFrame({'latitude': [10.0], 'longitude': [10.0]}).to_csv(source, index=False)

        code, _ = _run(capsys, [
            'batch', '--input', str(source), '--output', str(tmp_path / "out.csv"), '--length', '0',
        ])
        assert code == 1

    def test_missing_input(self, capsys, tmp_path):
        code, _ = _run(capsys, [
            'batch', '--input', str(tmp_path / "nope.csv"), '--output', str(tmp_path / "out.csv"),
        ])
        assert code == 1
