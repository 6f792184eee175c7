import pytest
import yaml

from ecell.cli import main
from ecell.render import render_row

SEED_ROW = 65536  # single live cell at bit 16
RULE_30_ROWS = [SEED_ROW, 229376, 409600]


def test_prints_each_generation(capsys):
    assert main(["-r", "30", "-p", str(SEED_ROW), "-n", "2"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines == [render_row(row) for row in RULE_30_ROWS]


def test_default_generation_count(capsys):
    assert main(["-r", "90", "-p", "1"]) == 0
    assert len(capsys.readouterr().out.splitlines()) == 32


def test_quiet_with_output_file(tmp_path, capsys):
    out = tmp_path / "gens.txt"
    assert main(["-r", "30", "-p", str(SEED_ROW), "-n", "2", "-q", "-o", str(out)]) == 0
    assert capsys.readouterr().out == ""
    assert out.read_text().splitlines() == [str(row) for row in RULE_30_ROWS]


def test_verbose_summary_and_header(tmp_path, capsys):
    out = tmp_path / "gens.txt"
    assert main(["-v", "-r", "30", "-p", str(SEED_ROW), "-n", "2", "-o", str(out)]) == 0
    text = capsys.readouterr().out
    assert text.startswith(
        f"Initial population = {SEED_ROW}, rule = 30, number of generations = 2, printing to {out}.\n"
        "The rule 30 corresponds to...\n"
        "111\t110\t101\t100\t011\t010\t001\t000\n"
    )
    assert "\n\nGenerating...\n" in text
    assert text.endswith(render_row(RULE_30_ROWS[-1]) + "\n")
    assert out.read_text().splitlines()[0] == f"POP = {SEED_ROW}, RULE = 30, NUM_GEN = 2"


def test_quiet_and_verbose_conflict():
    with pytest.raises(SystemExit) as exc:
        main(["-q", "-v"])
    assert exc.value.code == 2


@pytest.mark.parametrize("argv", [["-r", "256"], ["-r", "-1"], ["-p", str(1 << 32)], ["-n", "-3"]])
def test_out_of_range_values_fail(argv, capsys):
    assert main(argv + ["-q"]) == 1
    assert "Configuration error" in capsys.readouterr().err


def test_bad_output_path_fails(tmp_path, capsys):
    assert main(["-q", "-o", str(tmp_path / "missing" / "gens.txt")]) == 1
    assert "cannot open output file" in capsys.readouterr().err


def test_seed_makes_random_runs_repeatable(capsys):
    main(["--seed", "11", "-n", "4"])
    first = capsys.readouterr().out
    main(["--seed", "11", "-n", "4"])
    assert capsys.readouterr().out == first


def test_save_config_records_resolved_values(tmp_path):
    saved = tmp_path / "resolved.yaml"
    assert main(["-q", "--seed", "3", "--save-config", str(saved)]) == 0
    data = yaml.safe_load(saved.read_text())
    assert 0 <= data["rule"] <= 255
    assert 0 <= data["population"] < (1 << 32)
    assert data["seed"] == 3


def test_replay_from_config_file(tmp_path, capsys):
    cfg = tmp_path / "run.yaml"
    cfg.write_text(yaml.safe_dump({"rule": 30, "population": SEED_ROW, "generations": 1}))
    assert main(["--config", str(cfg), "-n", "2"]) == 0
    assert capsys.readouterr().out.splitlines() == [render_row(row) for row in RULE_30_ROWS]


@pytest.mark.parametrize("text", ["rule: thirty\n", "rule: 30.5\n", "population: [1, 2]\n"])
def test_wrongly_typed_config_file_fails(tmp_path, capsys, text):
    cfg = tmp_path / "run.yaml"
    cfg.write_text(text)
    assert main(["-q", "--config", str(cfg)]) == 1
    assert "must be an integer" in capsys.readouterr().err


def test_negative_seed_fails(capsys):
    assert main(["-q", "--seed", "-1"]) == 1
    assert "seed" in capsys.readouterr().err


def test_unwritable_save_config_fails(tmp_path, capsys):
    assert main(["-q", "--save-config", str(tmp_path)]) == 1
    assert "cannot write config file" in capsys.readouterr().err


@pytest.mark.parametrize("flag, value", [("-r", "30"), ("-p", "1"), ("-n", "2"), ("-o", "gens.txt")])
def test_repeated_option_rejected(flag, value, capsys):
    with pytest.raises(SystemExit) as exc:
        main([flag, value, flag, value])
    assert exc.value.code == 2
    assert "may only be given once" in capsys.readouterr().err
