"""Tests for load balancers."""
import random
import threading
from collections import Counter

import pytest
from msconfig import (
    ClientConnectionsEntry,
    LoadBalancer,
    NoAvailableEntryError,
    RandomLoadBalancer,
    RoundRobinLoadBalancer,
    WeightedRoundRobinBalancer,
)
from msconfig.balancer.entry import MASTER


class TestClientConnectionsEntry:
    """Tests for ClientConnectionsEntry."""

    def test_address(self):
        """Test address tuple and string form."""
        entry = ClientConnectionsEntry('10.0.0.2', 6379)
        assert entry.address == ('10.0.0.2', 6379)
        assert str(entry) == '10.0.0.2:6379'
        assert entry.is_master is False

    def test_equality_by_address(self):
        """Test entries for the same node are equal."""
        assert ClientConnectionsEntry('h', 1) == ClientConnectionsEntry('h', 1, node_type=MASTER)
        assert len({ClientConnectionsEntry('h', 1), ClientConnectionsEntry('h', 1)}) == 1
        assert ClientConnectionsEntry('h', 1) != ClientConnectionsEntry('h', 2)


class TestRoundRobinLoadBalancer:
    """Tests for RoundRobinLoadBalancer."""

    def test_cycles_in_order(self):
        """Test A, B, C then back to A."""
        balancer = RoundRobinLoadBalancer()
        entries = ['A', 'B', 'C']
        assert [balancer.select_entry(entries) for _ in range(4)] == ['A', 'B', 'C', 'A']

    def test_each_entry_once_per_cycle(self, slave_entries):
        """Test N calls over N entries return each entry exactly once."""
        balancer = RoundRobinLoadBalancer()
        selected = [balancer.select_entry(slave_entries) for _ in range(len(slave_entries))]
        assert selected == slave_entries
        assert balancer.select_entry(slave_entries) is slave_entries[0]

    def test_single_entry(self):
        """Test a single entry is always returned."""
        balancer = RoundRobinLoadBalancer()
        assert all(balancer.select_entry(['only']) == 'only' for _ in range(5))

    def test_membership_changes(self, slave_entries):
        """Test selection stays within the current entries as they shrink and grow."""
        balancer = RoundRobinLoadBalancer()
        for _ in range(5):
            balancer.select_entry(slave_entries)

        shrunk = slave_entries[:1]
        assert balancer.select_entry(shrunk) in shrunk

        grown = slave_entries + [ClientConnectionsEntry('10.0.0.5', 6379)]
        for _ in range(10):
            assert balancer.select_entry(grown) in grown

    def test_empty_entries(self):
        """Test choosing from nothing is an error."""
        with pytest.raises(NoAvailableEntryError):
            RoundRobinLoadBalancer().select_entry([])

    def test_empty_entries_is_value_error(self):
        """Test the empty-input error is a ValueError."""
        with pytest.raises(ValueError):
            RoundRobinLoadBalancer().select_entry(())

    def test_concurrent_selection(self, slave_entries):
        """Test concurrent callers split selections evenly."""
        balancer = RoundRobinLoadBalancer()
        results = []
        errors = []
        lock = threading.Lock()

        def select_many():
            try:
                picked = [balancer.select_entry(slave_entries) for _ in range(300)]
                with lock:
                    results.extend(picked)
            except Exception as e:
                errors.append(e)

        threads = [threading.Thread(target=select_many) for _ in range(10)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(errors) == 0
        counts = Counter(results)
        assert sum(counts.values()) == 3000
        assert all(counts[entry] == 1000 for entry in slave_entries)

    def test_to_dict(self):
        """Test document form."""
        assert RoundRobinLoadBalancer().to_dict() == {'type': 'round_robin'}


class TestRandomLoadBalancer:
    """Tests for RandomLoadBalancer."""

    def test_returns_member(self, slave_entries):
        """Test every selection is one of the entries."""
        balancer = RandomLoadBalancer()
        for _ in range(50):
            assert balancer.select_entry(slave_entries) in slave_entries

    def test_seeded(self, slave_entries):
        """Test a seeded generator gives repeatable choices."""
        first = RandomLoadBalancer(random.Random(42))
        second = RandomLoadBalancer(random.Random(42))
        assert ([first.select_entry(slave_entries) for _ in range(20)] ==
                [second.select_entry(slave_entries) for _ in range(20)])

    def test_uses_every_entry(self, slave_entries):
        """Test all entries are eventually chosen."""
        balancer = RandomLoadBalancer(random.Random(7))
        chosen = {balancer.select_entry(slave_entries) for _ in range(200)}
        assert chosen == set(slave_entries)

    def test_empty_entries(self):
        """Test choosing from nothing is an error."""
        with pytest.raises(NoAvailableEntryError):
            RandomLoadBalancer().select_entry([])

    def test_concurrent_selection(self, slave_entries):
        """Test concurrent callers only ever get one of the entries."""
        balancer = RandomLoadBalancer()
        results = []
        errors = []
        lock = threading.Lock()

        def select_many():
            try:
                picked = [balancer.select_entry(slave_entries) for _ in range(300)]
                with lock:
                    results.extend(picked)
            except Exception as e:
                errors.append(e)

        threads = [threading.Thread(target=select_many) for _ in range(10)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(errors) == 0
        assert len(results) == 3000
        assert set(results) <= set(slave_entries)


class TestWeightedRoundRobinBalancer:
    """Tests for WeightedRoundRobinBalancer."""

    def test_frequency_follows_weights(self, slave_entries):
        """Test each node is picked as often as its weight."""
        balancer = WeightedRoundRobinBalancer({
            '10.0.0.2:6379': 3,
            '10.0.0.3:6379': 2,
            '10.0.0.4:6379': 1,
        })
        counts = Counter(balancer.select_entry(slave_entries) for _ in range(60))
        assert counts[slave_entries[0]] == 30
        assert counts[slave_entries[1]] == 20
        assert counts[slave_entries[2]] == 10

    def test_selection_order(self):
        """Test the sequence within one weight cycle."""
        a = ClientConnectionsEntry('a', 6379)
        b = ClientConnectionsEntry('b', 6379)
        balancer = WeightedRoundRobinBalancer({'a:6379': 3})
        assert [balancer.select_entry([a, b]) for _ in range(4)] == [a, b, a, a]

    def test_default_weight(self, slave_entries):
        """Test unlisted nodes use the default weight."""
        balancer = WeightedRoundRobinBalancer({'10.0.0.2:6379': 4}, default_weight=2)
        counts = Counter(balancer.select_entry(slave_entries) for _ in range(80))
        assert counts[slave_entries[0]] == 40
        assert counts[slave_entries[1]] == 20
        assert counts[slave_entries[2]] == 20

    def test_equal_weights_behave_like_round_robin(self, slave_entries):
        """Test weight 1 everywhere cycles through the entries."""
        balancer = WeightedRoundRobinBalancer()
        assert [balancer.select_entry(slave_entries) for _ in range(6)] == slave_entries * 2

    def test_tuple_addresses(self):
        """Test weights may be keyed by (host, port)."""
        balancer = WeightedRoundRobinBalancer({('10.0.0.2', 6379): 5})
        assert balancer.weights == {('10.0.0.2', 6379): 5}

    @pytest.mark.parametrize('weight', [0, -1, 1.5, True])
    def test_invalid_weight(self, weight):
        """Test weights must be positive integers."""
        with pytest.raises(ValueError):
            WeightedRoundRobinBalancer({'10.0.0.2:6379': weight})

    def test_invalid_default_weight(self):
        """Test default weight must be a positive integer."""
        with pytest.raises(ValueError):
            WeightedRoundRobinBalancer(default_weight=0)

    def test_membership_changes(self, slave_entries):
        """Test selection stays within the current entries."""
        balancer = WeightedRoundRobinBalancer({'10.0.0.2:6379': 5})
        for _ in range(3):
            balancer.select_entry(slave_entries)
        remaining = slave_entries[1:]
        for _ in range(10):
            assert balancer.select_entry(remaining) in remaining

    def test_learned_nodes_not_in_weights(self, slave_entries):
        """Test nodes seen at selection time are not reported as configured."""
        balancer = WeightedRoundRobinBalancer({'10.0.0.2:6379': 2})
        balancer.select_entry(slave_entries)
        assert balancer.weights == {('10.0.0.2', 6379): 2}

    def test_empty_entries(self):
        """Test choosing from nothing is an error."""
        with pytest.raises(NoAvailableEntryError):
            WeightedRoundRobinBalancer().select_entry([])

    def test_weights_not_a_mapping(self):
        """Test weights given as a list are rejected."""
        with pytest.raises(TypeError):
            WeightedRoundRobinBalancer([1, 2])

    def test_concurrent_selection(self, slave_entries):
        """Test concurrent callers over whole cycles match the weights exactly."""
        balancer = WeightedRoundRobinBalancer({
            '10.0.0.2:6379': 3,
            '10.0.0.3:6379': 2,
            '10.0.0.4:6379': 1,
        })
        results = []
        errors = []
        lock = threading.Lock()

        def select_many():
            try:
                picked = [balancer.select_entry(slave_entries) for _ in range(60)]
                with lock:
                    results.extend(picked)
            except Exception as e:
                errors.append(e)

        threads = [threading.Thread(target=select_many) for _ in range(10)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        # 600 selections are 100 cycles of 3 + 2 + 1
        assert len(errors) == 0
        counts = Counter(results)
        assert counts[slave_entries[0]] == 300
        assert counts[slave_entries[1]] == 200
        assert counts[slave_entries[2]] == 100

    def test_departed_nodes_forgotten(self):
        """Test churn through unlisted nodes does not grow the weight table."""
        balancer = WeightedRoundRobinBalancer({'10.0.0.2:6379': 2})
        for i in range(1000):
            balancer.select_entry([ClientConnectionsEntry(f'10.1.{i // 256}.{i % 256}', 6379)])
        assert len(balancer._weights) == 2
        assert ('10.0.0.2', 6379) in balancer._weights
        assert balancer.weights == {('10.0.0.2', 6379): 2}

    def test_returning_node_starts_fresh(self):
        """Test a forgotten node comes back with a full default share."""
        a = ClientConnectionsEntry('a', 6379)
        b = ClientConnectionsEntry('b', 6379)
        c = ClientConnectionsEntry('c', 6379)
        balancer = WeightedRoundRobinBalancer(default_weight=2)
        balancer.select_entry([a])
        balancer.select_entry([b])
        balancer.select_entry([c])
        assert ('a', 6379) not in balancer._weights
        assert [balancer.select_entry([a, c]) for _ in range(3)] == [c, a, a]

    def test_to_dict(self):
        """Test document form."""
        balancer = WeightedRoundRobinBalancer({'10.0.0.2:6379': 2}, default_weight=3)
        assert balancer.to_dict() == {
            'type': 'weighted_round_robin',
            'weights': {'10.0.0.2:6379': 2},
            'default_weight': 3,
        }


class TestCustomLoadBalancer:
    """Tests for user supplied balancers."""

    def test_subclass(self, slave_entries):
        """Test a subclass only implements the selection itself."""

        class LastEntryBalancer(LoadBalancer):
            def _select(self, entries):
                return entries[-1]

        balancer = LastEntryBalancer()
        assert balancer.select_entry(slave_entries) is slave_entries[-1]
        with pytest.raises(NoAvailableEntryError):
            balancer.select_entry([])

    def test_abstract(self):
        """Test the interface cannot be instantiated."""
        with pytest.raises(TypeError):
            LoadBalancer()
