"""
Tests for ConnectionSet
"""

import pytest

from connections_guessing.connection import ALL_CONNECTIONS, Connection, Score
from connections_guessing.connection_set import (
    ALL_A_CONNECTIONS,
    ConnectionSet,
    FrozenConnectionSetError,
)


def connections(*labels):
    return [Connection.from_label(label) for label in labels]


def connection_set(*labels):
    return ConnectionSet.of(*connections(*labels))


ABCD, ABCE, ABCF, BCDE, EFGH = connections("ABCD", "ABCE", "ABCF", "BCDE", "EFGH")


class TestConstruction:
    def test_empty(self):
        s = ConnectionSet.empty()
        assert len(s) == 0
        assert s.is_empty()
        assert list(s) == []
        assert not s.frozen

    def test_of_and_from_collection(self):
        assert ConnectionSet.of(ABCD, ABCE) == ConnectionSet.from_collection([ABCE, ABCD])
        assert len(ConnectionSet.of(ABCD, ABCD)) == 1

    def test_repr(self):
        assert repr(ConnectionSet.of(ABCE, ABCD)) == "{ABCD, ABCE}"
        assert repr(ConnectionSet.empty()) == "{}"


class TestQueries:
    def test_contains(self):
        s = ConnectionSet.of(ABCD, EFGH)
        assert ABCD in s
        assert EFGH in s
        assert ABCE not in s
        assert "ABCD" not in s
        assert None not in s

    def test_iteration_is_canonical_order(self):
        s = ConnectionSet.of(ABCE, EFGH, ABCD, BCDE)
        assert list(s) == [BCDE, EFGH, ABCD, ABCE]
        assert list(s) == sorted(s)

    def test_iteration_is_restartable(self):
        s = ConnectionSet.of(ABCD, ABCE)
        assert list(s) == list(s)

    def test_set_operations(self):
        a = ConnectionSet.of(ABCD, ABCE)
        b = ConnectionSet.of(ABCE, ABCF)
        assert a & b == ConnectionSet.of(ABCE)
        assert a | b == ConnectionSet.of(ABCD, ABCE, ABCF)
        assert isinstance(a & b, ConnectionSet)
        assert ConnectionSet.of(ABCD) <= a
        assert not a.isdisjoint(b)
        assert a == {ABCD, ABCE}

    def test_not_hashable(self):
        with pytest.raises(TypeError):
            hash(ConnectionSet.empty())


class TestMutation:
    def test_add(self):
        s = ConnectionSet.empty()
        assert s.add(ABCD)
        assert not s.add(ABCD)
        assert len(s) == 1

    def test_remove(self):
        s = ConnectionSet.of(ABCD, ABCE)
        assert s.remove(ABCD)
        assert not s.remove(ABCD)
        assert list(s) == [ABCE]

    def test_remove_while_iterating(self):
        s = ConnectionSet(ALL_CONNECTIONS)
        for connection in s:
            if not connection.contains(0):
                s.remove(connection)
        assert s == ALL_A_CONNECTIONS

    def test_remove_if(self):
        s = ConnectionSet(ALL_CONNECTIONS)
        assert s.remove_if(lambda c: c.contains(7)) == 35
        assert len(s) == 35
        assert not any(c.contains(7) for c in s)

    def test_freeze(self):
        s = ConnectionSet.of(ABCD)
        assert s.freeze() is s
        assert s.freeze() is s
        assert s.frozen
        with pytest.raises(FrozenConnectionSetError):
            s.add(ABCE)
        with pytest.raises(FrozenConnectionSetError):
            s.remove(ABCD)
        with pytest.raises(FrozenConnectionSetError):
            s.remove_if(lambda c: True)
        assert list(s) == [ABCD]


class TestPartition:
    def test_all_a_connections(self):
        assert len(ALL_A_CONNECTIONS) == 35
        assert ALL_A_CONNECTIONS.frozen
        assert [c.label for c in ALL_A_CONNECTIONS][:5] == ["ABCD", "ABCE", "ABCF", "ABCG", "ABCH"]

    def test_first_guess(self):
        scores = ALL_A_CONNECTIONS.partition_by_guess(ABCD)
        assert scores == {
            Score.MATCH: connection_set("ABCD"),
            Score.ONE_AWAY: connection_set(
                "ABCE", "ABCF", "ABCG", "ABCH", "ABDE", "ABDF", "ABDG", "ABDH", "ACDE", "ACDF",
                "ACDG", "ACDH", "AEFG", "AEFH", "AEGH", "AFGH"),
            Score.TWO_AWAY: connection_set(
                "ABEF", "ACEF", "ADEF", "ABEG", "ACEG", "ADEG", "ABFG", "ACFG", "ADFG", "ABEH",
                "ACEH", "ADEH", "ABFH", "ACFH", "ADFH", "ABGH", "ACGH", "ADGH"),
        }

    def test_second_guess_one_away(self):
        one_away = ALL_A_CONNECTIONS.partition_by_guess(ABCD)[Score.ONE_AWAY]
        assert one_away.partition_by_guess(ABCE) == {
            Score.MATCH: connection_set("ABCE"),
            Score.ONE_AWAY: connection_set("ABCF", "ABCG", "ABCH", "ABDE", "ACDE", "AFGH"),
            Score.TWO_AWAY: connection_set(
                "ABDF", "ABDG", "ABDH", "ACDF", "ACDG", "ACDH", "AEFG", "AEFH", "AEGH"),
        }

    def test_second_guess_two_away(self):
        two_away = ALL_A_CONNECTIONS.partition_by_guess(ABCD)[Score.TWO_AWAY]
        assert two_away.partition_by_guess(ABCF) == {
            Score.MATCH: ConnectionSet.empty(),
            Score.ONE_AWAY: connection_set(
                "ABEF", "ACEF", "ADEG", "ABFG", "ACFG", "ADEH", "ABFH", "ACFH", "ADGH"),
            Score.TWO_AWAY: connection_set(
                "ADEF", "ABEG", "ACEG", "ADFG", "ABEH", "ACEH", "ADFH", "ABGH", "ACGH"),
        }

    def test_partitions_are_frozen(self):
        for part in ALL_A_CONNECTIONS.partition_by_guess(ABCD).values():
            assert part.frozen

    @pytest.mark.parametrize("universe", [ALL_A_CONNECTIONS, ConnectionSet(ALL_CONNECTIONS),
                                          connection_set("BCDE", "EFGH", "ABCF")])
    def test_partitions_cover_universe(self, universe):
        for guess in ALL_CONNECTIONS:
            scores = universe.partition_by_guess(guess)
            assert sum(len(part) for part in scores.values()) == len(universe)
            assert scores[Score.MATCH] | scores[Score.ONE_AWAY] | scores[Score.TWO_AWAY] == universe
            assert scores[Score.MATCH].isdisjoint(scores[Score.ONE_AWAY])
            assert scores[Score.MATCH].isdisjoint(scores[Score.TWO_AWAY])
            assert scores[Score.ONE_AWAY].isdisjoint(scores[Score.TWO_AWAY])
            for score, part in scores.items():
                assert all(c.score_against(guess) == score for c in part)
