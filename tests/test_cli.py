"""Tests for the command line in headless mode."""

import pytest

from chip8.cli import build_parser, load_rom, main


@pytest.fixture
def rom(tmp_path, assemble):
    def _rom(*words):
        path = tmp_path / "test.ch8"
        path.write_bytes(assemble(*words))
        return str(path)
    return _rom


class TestParser:

    def test_defaults(self):
        args = build_parser().parse_args(["pong.ch8"])
        assert args.scale == 10
        assert args.cpu_hz == 500
        assert args.timer_hz == 60
        assert args.on_fault == "halt"
        assert args.headless is None

    def test_bad_scale(self, rom):
        with pytest.raises(SystemExit) as exc:
            main([rom(0x1200), "--scale", "0", "--headless", "1"])
        assert exc.value.code == 2


class TestHeadless:

    def test_draws_font_glyph(self, rom, capsys):
        # LD F, V0; DRW V0, V0, 5; JP 204
        code = main([rom(0xF029, 0xD005, 0x1204), "--headless", "2", "--seed", "1"])
        assert code == 0
        lines = capsys.readouterr().out.splitlines()
        assert len(lines) == 32
        assert lines[0].startswith("####....")
        assert lines[1].startswith("#..#....")

    def test_fault_halts(self, rom):
        assert main([rom(0x5121), "--headless", "3"]) == 1

    def test_fault_skip(self, rom):
        assert main([rom(0x5121, 0x1202), "--headless", "3", "--on-fault", "skip"]) == 0

    def test_missing_rom(self, tmp_path):
        assert main([str(tmp_path / "nope.ch8"), "--headless", "1"]) == 2

    def test_rom_too_large(self, tmp_path):
        path = tmp_path / "big.ch8"
        path.write_bytes(bytes(4096))
        assert main([str(path), "--headless", "1"]) == 2

    def test_load_rom(self, tmp_path):
        path = tmp_path / "r.ch8"
        path.write_bytes(b"\x00\xE0")
        assert load_rom(path) == b"\x00\xE0"
