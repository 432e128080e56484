"""Tests for step expansion — traversal orders and inter-step policies."""

from __future__ import annotations

from workout_timeline.compiler.expansion import RestPolicy, choose_rest_policy, expand
from workout_timeline.models.block import Block, BlockParams, PostCardio
from workout_timeline.models.enums import BlockType, Mode, Pattern, StepType


def _spans(steps) -> list[tuple[StepType, int, int]]:
    return [(s.step_type, s.at_ms, s.end_ms) for s in steps]


class TestStraightSets:
    def test_two_exercises_two_sets(self, block_factory) -> None:
        block = block_factory(
            Pattern.STRAIGHT_SETS, sets_per_exercise=2, work_sec=30, rest_sec=15,
        )
        expanded = expand(block)
        assert _spans(expanded.steps) == [
            (StepType.WORK, 0, 30000),
            (StepType.REST, 30000, 45000),
            (StepType.WORK, 45000, 75000),
            (StepType.REST, 75000, 90000),
            (StepType.WORK, 90000, 120000),
            (StepType.REST, 120000, 135000),
            (StepType.WORK, 135000, 165000),
        ]
        assert expanded.duration_ms == 165000

    def test_all_sets_of_an_exercise_come_first(self, block_factory) -> None:
        block = block_factory(Pattern.STRAIGHT_SETS, n_exercises=3, sets_per_exercise=3)
        ids = [s.exercise.id for s in expand(block).steps if s.step_type == StepType.WORK]
        assert ids == [1, 1, 1, 2, 2, 2, 3, 3, 3]

    def test_never_runs_round_transition(self, block_factory) -> None:
        block = block_factory(
            Pattern.STRAIGHT_SETS, mode=Mode.REPS, sets_per_exercise=3, target_reps="8",
            work_sec=40,
        )
        types = {s.step_type for s in expand(block).steps}
        assert StepType.ROUND_REST not in types
        assert StepType.COUNTDOWN not in types

    def test_set_numbers_and_rest_text(self, block_factory) -> None:
        block = block_factory(Pattern.STRAIGHT_SETS, sets_per_exercise=2)
        steps = expand(block).steps
        assert [s.set for s in steps if s.step_type == StepType.WORK] == [1, 2, 1, 2]
        rests = [s.text for s in steps if s.step_type == StepType.REST]
        assert rests[0] == "Rest before set 2"
        assert rests[1] == "Transition to Exercise 2"

    def test_rep_gated_exercise_gets_await_ready(self, block_factory, exercise_factory) -> None:
        block = block_factory(
            Pattern.STRAIGHT_SETS,
            mode=None,
            exercises=(exercise_factory(1, target_reps="10"),),
            sets_per_exercise=3,
        )
        types = [s.step_type for s in expand(block).steps]
        assert types == [
            StepType.WORK, StepType.AWAIT_READY,
            StepType.WORK, StepType.AWAIT_READY,
            StepType.WORK,
        ]


class TestCircuit:
    def test_two_rounds_with_round_transition(self, block_factory) -> None:
        block = block_factory(
            Pattern.CIRCUIT, sets_per_exercise=2, work_sec=20, rest_sec=10,
        )
        expanded = expand(block)
        assert _spans(expanded.steps) == [
            (StepType.WORK, 0, 20000),
            (StepType.REST, 20000, 30000),
            (StepType.WORK, 30000, 50000),
            (StepType.ROUND_REST, 50700, 50800),
            (StepType.COUNTDOWN, 53000, 53220),
            (StepType.COUNTDOWN, 54000, 54220),
            (StepType.COUNTDOWN, 55000, 55600),
            (StepType.WORK, 55600, 75600),
            (StepType.REST, 75600, 85600),
            (StepType.WORK, 85600, 105600),
        ]
        assert expanded.steps[6].label == "GO"
        assert expanded.duration_ms == 105600

    def test_round_ordering(self, block_factory) -> None:
        block = block_factory(Pattern.SUPERSET, n_exercises=3, sets_per_exercise=3)
        work = [s for s in expand(block).steps if s.step_type == StepType.WORK]
        assert [s.exercise.id for s in work] == [1, 2, 3] * 3
        assert [s.round for s in work] == [1, 1, 1, 2, 2, 2, 3, 3, 3]

    def test_round_rest_sec_is_ignored(self, block_factory) -> None:
        plain = expand(block_factory(Pattern.CIRCUIT, sets_per_exercise=3))
        with_round_rest = expand(
            block_factory(Pattern.CIRCUIT, sets_per_exercise=3, round_rest_sec=90),
        )
        assert _spans(plain.steps) == _spans(with_round_rest.steps)

    def test_rep_mode_round_end_uses_round_transition(self, block_factory) -> None:
        block = block_factory(
            Pattern.SUPERSET, mode=Mode.REPS, sets_per_exercise=2, target_reps="12",
        )
        types = [s.step_type for s in expand(block).steps]
        assert types[:3] == [StepType.WORK, StepType.REST, StepType.WORK]
        assert types[3] == StepType.ROUND_REST
        assert StepType.AWAIT_READY not in types

    def test_rep_gated_round_end_waits_instead_of_ritual(
        self, block_factory, exercise_factory,
    ) -> None:
        block = block_factory(
            Pattern.CIRCUIT,
            mode=None,
            exercises=(exercise_factory(1), exercise_factory(2, target_reps="12")),
            sets_per_exercise=2,
        )
        types = [s.step_type for s in expand(block).steps]
        assert types == [
            StepType.WORK, StepType.REST, StepType.WORK, StepType.AWAIT_READY,
            StepType.WORK, StepType.REST, StepType.WORK,
        ]

    def test_legacy_rep_gate_mid_circuit(self, block_factory, exercise_factory) -> None:
        block = block_factory(
            Pattern.CIRCUIT,
            mode=None,
            exercises=(exercise_factory(1, target_reps="12"), exercise_factory(2)),
            sets_per_exercise=2,
        )
        steps = expand(block).steps
        gate = steps[1]
        assert gate.step_type == StepType.AWAIT_READY
        assert gate.at_ms == gate.end_ms == steps[0].end_ms
        assert "How many reps" in gate.coach_prompt
        assert gate.label == "Finished 12 reps?"
        # the gate does not move the clock
        assert steps[2].at_ms == steps[0].end_ms

    def test_explicit_work_sec_disables_rep_gate(self, block_factory, exercise_factory) -> None:
        block = block_factory(
            Pattern.CIRCUIT,
            mode=None,
            exercises=(exercise_factory(1, target_reps="12", work_sec=45), exercise_factory(2)),
            sets_per_exercise=1,
        )
        steps = expand(block).steps
        assert steps[1].step_type == StepType.REST
        assert steps[0].duration_ms == 45000


class TestOverrides:
    def test_exercise_overrides_win(self, block_factory, exercise_factory) -> None:
        block = block_factory(
            Pattern.CIRCUIT,
            exercises=(exercise_factory(1, work_sec=50, rest_sec=5), exercise_factory(2)),
            sets_per_exercise=1,
            work_sec=20,
            rest_sec=10,
        )
        steps = expand(block).steps
        assert steps[0].duration_ms == 50000
        assert steps[1].duration_ms == 5000
        assert steps[2].duration_ms == 20000

    def test_zero_rest_override_is_respected(self, block_factory, exercise_factory) -> None:
        block = block_factory(
            Pattern.STRAIGHT_SETS,
            exercises=(exercise_factory(1, rest_sec=0),),
            sets_per_exercise=2,
            rest_sec=30,
        )
        rest = expand(block).steps[1]
        assert rest.step_type == StepType.REST
        assert rest.at_ms == rest.end_ms

    def test_defaults_when_params_absent(self, block_factory) -> None:
        steps = expand(block_factory(Pattern.CIRCUIT, n_exercises=2)).steps
        assert [s.duration_ms for s in steps] == [30000, 30000, 30000]


class TestLeadingAndTrailingSteps:
    def test_no_trailing_rest(self, block_factory) -> None:
        for pattern in Pattern:
            steps = expand(block_factory(pattern, sets_per_exercise=3)).steps
            assert steps[-1].step_type == StepType.WORK

    def test_intro_and_await_ready_prefix(self, block_factory) -> None:
        block = block_factory(Pattern.CIRCUIT, await_ready_before_start=True)
        steps = expand(block, include_intro=True, workout_name="Leg Day").steps
        intro, gate, first_work = steps[0], steps[1], steps[2]
        assert intro.step_type == StepType.INSTRUCTION
        assert intro.pre_workout is True
        assert (intro.at_ms, intro.end_ms) == (0, 5000)
        assert "Leg Day" in intro.text
        assert gate.step_type == StepType.AWAIT_READY
        assert gate.at_ms == gate.end_ms == 5000
        assert first_work.at_ms == 5000

    def test_post_cardio_finisher(self, block_factory) -> None:
        block = block_factory(
            Pattern.CIRCUIT,
            n_exercises=1,
            sets_per_exercise=1,
            work_sec=30,
            transition_sec=20,
            post_cardio=PostCardio(exercise="Rower", duration_sec=300),
        )
        steps = expand(block).steps
        assert _spans(steps) == [
            (StepType.WORK, 0, 30000),
            (StepType.TRANSITION, 30000, 50000),
            (StepType.WORK, 50000, 350000),
        ]
        finisher = steps[-1]
        assert finisher.exercise.id == 0
        assert finisher.exercise.name == "Rower"
        assert finisher.exercise.muscle_group == "Cardio"
        assert finisher.label == "Cardio Finisher"


class TestBlockTypes:
    def test_transition_block(self) -> None:
        block = Block(
            block_type=BlockType.TRANSITION,
            name="Move to the rack",
            description="Grab dumbbells",
            params=BlockParams(duration_sec=45),
        )
        steps = expand(block).steps
        assert len(steps) == 1
        assert steps[0].step_type == StepType.TRANSITION
        assert (steps[0].at_ms, steps[0].end_ms) == (0, 45000)
        assert steps[0].label == "Move to the rack"
        assert steps[0].text == "Grab dumbbells"

    def test_transition_block_default_duration(self) -> None:
        steps = expand(Block(block_type=BlockType.TRANSITION)).steps
        assert steps[0].duration_ms == 60000

    def test_unsupported_block_yields_no_steps(self, block_factory, caplog) -> None:
        block = block_factory(block_type=BlockType.UNSUPPORTED, name="AMRAP")
        expanded = expand(block)
        assert expanded.steps == ()
        assert expanded.duration_ms == 0
        assert "unsupported type" in caplog.text

    def test_empty_exercise_list(self, block_factory) -> None:
        block = block_factory(Pattern.CIRCUIT, exercises=(), await_ready_before_start=True)
        steps = expand(block).steps
        assert [s.step_type for s in steps] == [StepType.AWAIT_READY]


class TestNumbering:
    def test_steps_numbered_from_one(self, block_factory) -> None:
        steps = expand(block_factory(Pattern.CIRCUIT, sets_per_exercise=3)).steps
        assert [s.step for s in steps] == list(range(1, len(steps) + 1))

    def test_await_ready_points_to_next_step(self, block_factory) -> None:
        block = block_factory(Pattern.CIRCUIT, await_ready_before_start=True)
        gate = expand(block).steps[0]
        assert gate.next_step_id == "step-2"

    def test_inputs_not_mutated(self, block_factory) -> None:
        block = block_factory(Pattern.CIRCUIT, sets_per_exercise=2)
        snapshot = repr(block)
        expand(block)
        assert repr(block) == snapshot


class TestChooseRestPolicy:
    def test_end_of_timeline_wins(self, block_factory, exercise_factory) -> None:
        block = block_factory(mode=Mode.REPS, target_reps="10")
        ex = exercise_factory(1)
        assert choose_rest_policy(block, ex, True, True) == RestPolicy.NONE

    def test_priority_order(self, block_factory, exercise_factory) -> None:
        ex = exercise_factory(1)
        reps_block = block_factory(mode=Mode.REPS, target_reps="10")
        legacy_block = block_factory(mode=None, target_reps="10")
        timed_block = block_factory(mode=Mode.TIME)
        assert choose_rest_policy(reps_block, ex, False, True) == RestPolicy.ROUND_TRANSITION
        assert choose_rest_policy(legacy_block, ex, False, True) == RestPolicy.AWAIT_READY
        assert choose_rest_policy(timed_block, ex, False, True) == RestPolicy.ROUND_TRANSITION
        assert choose_rest_policy(timed_block, ex, False, False) == RestPolicy.TIMED_REST
        assert choose_rest_policy(reps_block, ex, False, False) == RestPolicy.TIMED_REST
