import pytest

from hydromoo.algorithms import build_algorithm
from hydromoo.exceptions import AlgorithmStateError, ConfigurationError, EvaluationError
from hydromoo.experiment import (
    ExperimentAlgorithm,
    ExperimentRunner,
    ObservableLog,
    SolutionListOutput,
    read_solution_file,
)
from hydromoo.problems import IntegerSphere, LinearTradeoff

NSGAII_SMALL = {"population_size": 10, "max_evaluations": 40}


def _cell(problem, run_id=0, tag="nsgaii"):
    algorithm = build_algorithm("nsgaii", problem, seed=run_id, config=NSGAII_SMALL)
    return ExperimentAlgorithm(algorithm, "linear_tradeoff", run_id, algorithm_tag=tag)


def test_cell_writes_fun_and_var_files(tmp_path):
    cell = _cell(LinearTradeoff())
    cell.prepare_to_run(tmp_path)
    out_dir = tmp_path / "data" / "nsgaii" / "linear_tradeoff"
    assert cell.fun_file == out_dir / "FUN0.tsv"
    assert cell.var_file == out_dir / "VAR0.tsv"

    while cell.has_next_step():
        cell.run_single_step()
    assert cell.generations == 3

    fun, var = cell.save_solution_list()
    front = cell.result()
    assert "\t" in fun.read_text(encoding="utf-8").splitlines()[0]
    assert read_solution_file(fun).shape == (len(front), 2)
    assert read_solution_file(var).shape == (len(front), 2)
    assert cell.log.lines[0] == f"Creating {out_dir}"
    assert cell.log.lines[1].startswith("- Running algorithm: nsgaii, problem: linear_tradeoff, run: 0, funFile:")
    assert cell.log.lines[-1] == f"Saved {len(front)} solutions to {fun}"


def test_saving_requires_a_finished_and_prepared_cell(tmp_path):
    cell = _cell(LinearTradeoff())
    cell.prepare_to_run(tmp_path)
    cell.run_single_step()
    with pytest.raises(AlgorithmStateError):
        cell.save_solution_list()

    unprepared = _cell(LinearTradeoff())
    unprepared.prepare_to_run(None)
    while unprepared.has_next_step():
        unprepared.run_single_step()
    with pytest.raises(AlgorithmStateError):
        unprepared.save_solution_list()


def test_empty_base_directory_is_rejected():
    with pytest.raises(ConfigurationError):
        _cell(LinearTradeoff()).prepare_to_run("")


def test_output_of_integer_and_empty_lists(tmp_path, rng):
    problem = IntegerSphere(n_var=3)
    solutions = [problem.create_solution(rng) for _ in range(4)]
    for s in solutions:
        problem.evaluate(s)
    fun, var = SolutionListOutput(solutions).write(tmp_path / "FUN.tsv", tmp_path / "VAR.tsv")
    assert "." not in var.read_text(encoding="utf-8")
    assert read_solution_file(fun).shape == (4, 1)

    empty_fun, _ = SolutionListOutput([]).write(tmp_path / "e" / "FUN.tsv", tmp_path / "e" / "VAR.tsv")
    assert empty_fun.read_text(encoding="utf-8") == ""
    assert read_solution_file(empty_fun).shape == (0, 0)


def test_runner_runs_every_cell_and_closes_problems(counting_problem):
    problems = [counting_problem(), counting_problem()]
    cells = [_cell(problems[0], 0, "a"), _cell(problems[1], 0, "b")]
    runner = ExperimentRunner(cells)
    report = runner.run()

    assert report.completed == 2
    assert not report.cancelled
    assert set(report.results) == {("a", 0), ("b", 0)}
    assert [p.released for p in problems] == [1, 1]
    assert [p.evaluated for p in problems] == [40, 40]
    assert runner.log.lines[0] == "ExecuteAlgorithms: The result will not be saved"
    assert runner.log.lines[-1] == "Experiment finished: 2 algorithms"

    progress = runner.progress.peek()
    assert progress.algorithm == "b"
    assert progress.generation == 3
    assert progress.fraction == 1.0
    assert progress.total_algorithms == 2
    assert progress.status == "Number of evaluations: 40 / 40"


def test_runner_in_background_thread(tmp_path):
    runner = ExperimentRunner([_cell(LinearTradeoff())], base_dir=tmp_path / "results")
    future = runner.start()
    report = future.result(timeout=60)
    assert report.completed == 1
    assert (tmp_path / "results" / "data" / "nsgaii" / "linear_tradeoff" / "FUN0.tsv").exists()
    with pytest.raises(AlgorithmStateError):
        runner.start()
    with pytest.raises(AlgorithmStateError):
        runner.run()


def test_cancel_before_start(counting_problem):
    problem = counting_problem()
    runner = ExperimentRunner([_cell(problem)])
    runner.cancel()
    report = runner.run()
    assert report.cancelled
    assert report.completed == 0
    assert problem.evaluated == 0
    assert problem.released == 1
    assert runner.log.lines[-1] == "Experiment cancelled after 0 of 1 algorithms"


def test_cancel_is_observed_between_generations(counting_problem):
    problems = [counting_problem(), counting_problem()]
    cells = [_cell(problems[0], 0, "a"), _cell(problems[1], 0, "b")]
    log = ObservableLog()
    runner = ExperimentRunner(cells, log=log)

    def cancel_on_start(line):
        if line.startswith("- Running algorithm"):
            runner.cancel()

    log.subscribe(cancel_on_start)
    report = runner.run()
    assert report.cancelled
    assert report.completed == 0
    assert cells[0].generations == 1
    assert cells[1].generations == 0
    assert [p.released for p in problems] == [1, 1]


def test_failure_propagates_and_closes_every_cell(counting_problem):
    failing = counting_problem(fail_after=15)
    healthy = counting_problem()
    runner = ExperimentRunner([_cell(failing, 0, "a"), _cell(healthy, 0, "b")])
    with pytest.raises(EvaluationError):
        runner.run()
    assert failing.released == 1
    assert healthy.released == 1
    assert healthy.evaluated == 0
