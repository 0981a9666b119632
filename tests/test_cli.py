import os

import matplotlib
matplotlib.use('Agg')  # Use non-interactive backend

import Qshoot
from Qshoot import cli


def test_list(capsys):
    assert cli.main(['list']) == 0
    out = capsys.readouterr().out
    assert 'barrier' in out
    assert 'box' in out


def test_no_arguments_lists(capsys):
    assert cli.main([]) == 0
    assert 'Available potentials' in capsys.readouterr().out


def test_solve_text(capsys):
    assert cli.main(['0,0,0,10,10,10,0,0,0']) == 0
    E, _ = Qshoot.solve(Qshoot.DEFAULT_POTENTIAL, 0.01, 1.0)
    assert Qshoot.format_eigenvalue(E) in capsys.readouterr().out


def test_wrong_length_uses_default(capsys):
    assert cli.main(['0,0,0']) == 0
    out = capsys.readouterr().out
    E, _ = Qshoot.solve(Qshoot.DEFAULT_POTENTIAL, 0.01, 1.0)
    assert 'using default potential' in out
    assert Qshoot.format_eigenvalue(E) in out


def test_points_sets_expected_length(capsys):
    assert cli.main(['0,0,0', '--points', '3', '--dx', '0.1']) == 0
    out = capsys.readouterr().out
    assert 'default' not in out
    assert Qshoot.format_eigenvalue(3 / (5 * 0.1**2)) in out


def test_named_system_with_reference(capsys):
    assert cli.main(['--system', 'box', '--points', '51', '--reference', '--info']) == 0
    out = capsys.readouterr().out
    assert 'Reference ground state' in out
    assert 'Grid points: 51' in out
    assert 'Norm: 1.0000000000' in out


def test_unknown_system(capsys):
    assert cli.main(['--system', 'hydrogen']) == 1
    assert "Unknown system" in capsys.readouterr().out


def test_solver_error_exit_status(capsys):
    assert cli.main(['0,0,0,0,0,0,0,0,0', '--dx', '-1']) == 1
    assert 'Error' in capsys.readouterr().out


def test_save(tmp_path, capsys):
    path = tmp_path / 'result'
    assert cli.main(['0,0,0,10,10,10,0,0,0', '--save', str(path)]) == 0
    assert os.path.exists(str(path) + '.npz')

    loaded = Qshoot.load_result(str(path))
    assert loaded.system.grid.points == 9
