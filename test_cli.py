#!/usr/bin/env python3
"""
Tests for the command line, terminal key decoding and headless snapshots.
"""

import os
import pygame
import pytest
from terminal_genart.__main__ import UsageError, main, parse_args
from terminal_genart.controls import slider_track
from terminal_genart.session import Session
from terminal_genart.presets import create_experiment
from terminal_genart.terminal import decode_keys, footer_text
from terminal_genart.viewer import translate_key


def test_parse_args():
    print("Testing argument parsing...")
    opts = parse_args([])
    assert opts["experiment"] is None
    assert (opts["width"], opts["height"]) == (80, 24)
    assert opts["aspect"] == 2.0 and opts["snap"] == 0

    opts = parse_args(["julia", "--size", "120x40", "--seed", "7", "--aspect", "1.5"])
    assert opts["experiment"] == "julia"
    assert (opts["width"], opts["height"]) == (120, 40)
    assert opts["seed"] == 7 and opts["aspect"] == 1.5

    assert parse_args(["life", "--snap", "50"])["snap"] == 50
    assert parse_args(["--terminal"])["terminal"] is True

    for bad in (["nope"], ["--size", "12"], ["--size", "0x5"], ["--seed", "abc"],
                ["--aspect", "-1"], ["--seed"]):
        with pytest.raises(UsageError):
            parse_args(bad)
    print("  ✓ Arguments parse")


def test_main_exit_codes(capsys):
    print("Testing main()...")
    assert main(["--list"]) == 0
    out = capsys.readouterr().out
    assert "seahorse" in out and "[life]" in out

    assert main(["--bogus"]) == 1
    assert "Unknown argument" in capsys.readouterr().out
    assert main(["--help"]) == 0


def test_snap_writes_png(tmp_path):
    print("Testing headless snap...")
    cwd = os.getcwd()
    os.chdir(tmp_path)
    try:
        assert main(["plasma", "--size", "20x6", "--snap", "3", "--seed", "1"]) == 0
    finally:
        os.chdir(cwd)
    assert (tmp_path / "screenshots" / "genart_plasma.png").exists()
    assert (tmp_path / "screenshots" / "latest.png").exists()
    print("  ✓ Snapshot saved")


def test_decode_keys():
    print("Testing terminal key decoding...")
    assert decode_keys("\x1b[A\x1b[B\x1b[C\x1b[D") == ["up", "down", "right", "left"]
    assert decode_keys("\x1bOC") == ["right"], "Application-mode arrows"
    assert decode_keys("\x1b") == ["escape"]
    assert decode_keys(" \tR.") == ["space", "tab", "r", "."]
    assert decode_keys("\x7f\r") == ["backspace", "return"]
    assert decode_keys("\x01") == [], "Control characters are dropped"
    print("  ✓ Keys decode to controller names")


def test_viewer_keys_match_terminal_keys():
    assert translate_key(pygame.K_LEFT) == "left"
    assert translate_key(pygame.K_SPACE, " ") == "space"
    assert translate_key(pygame.K_a, "A") == "a"
    assert translate_key(pygame.K_PERIOD, ".") == "."
    assert translate_key(pygame.K_LSHIFT, "") is None
    for raw in ("\x1b[D", " ", "\t"):
        assert decode_keys(raw)[0] in ("left", "space", "tab")


def test_slider_track_and_footer():
    print("Testing text sliders...")
    assert slider_track(0, 0, 10, 10) == "░" * 10
    assert slider_track(10, 0, 10, 10) == "█" * 10
    assert slider_track(5, 0, 10, 10) == "█" * 5 + "░" * 5
    assert slider_track(99, 0, 10, 4) == "████", "Values past max fill the track"
    assert slider_track(3, 3, 3, 4) == "░░░░", "Zero span shows an empty track"

    session = Session(create_experiment("flow", 20, 5))
    text = footer_text(session, width=8)
    assert text.startswith("Flow Field")
    assert "Scale" in text and "[Tab]" in text
    print("  ✓ Slider tracks render")


if __name__ == "__main__":
    import pathlib
    import tempfile

    print("\n=== Testing Command Line ===\n")

    test_parse_args()
    test_decode_keys()
    test_viewer_keys_match_terminal_keys()
    test_slider_track_and_footer()
    with tempfile.TemporaryDirectory() as d:
        test_snap_writes_png(pathlib.Path(d))

    print("\n✓ All tests passed!\n")
