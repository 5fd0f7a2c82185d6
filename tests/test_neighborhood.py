"""Tests for neighborhood regeneration: eviction, spawning and resuming caches."""

from __future__ import annotations

import unittest

from geocoin.core.errors import InactiveCacheError
from geocoin.core.enums import TransferDirection
from geocoin.core.grid import CoordinateGrid
from geocoin.core.cache_store import CacheStateStore
from geocoin.core.models import Cache, Inventory, Point
from geocoin.engine.neighborhood import NeighborhoodManager
from geocoin.systems.generator import CacheGenerator
from geocoin.systems.rng import DeterministicGenerator
from tests.helpers.world import RecordingView, ScriptedGenerator, build_manager


class TestOneCellEast(unittest.TestCase):
    """Walking one tile east swaps exactly one column of the window."""

    def setUp(self):
        self.grid = CoordinateGrid(0.0001, 8)
        self.gen = CacheGenerator(DeterministicGenerator(), spawn_probability=0.5)
        self.store = CacheStateStore()
        self.view = RecordingView()
        self.manager = NeighborhoodManager(self.grid, self.gen, self.store, self.view)

    def test_only_edge_columns_change(self):
        self.manager.on_player_moved(Point(0.0, 0.0))
        before = dict(self.manager.active)
        before_tokens = {cell: list(cache.tokens) for cell, cache in before.items()}
        self.view.reset()

        result = self.manager.on_player_moved(Point(0.0001, 0.0))

        self.assertEqual((result.origin.i, result.origin.j), (1, 0))
        evicted_cells = {c.cell for c in result.evicted}
        spawned_cells = {c.cell for c in result.spawned}

        expected_evicted = {c for c in before if c.i == -8}
        expected_spawned = {
            self.grid.cell_at(8, j) for j in range(-8, 8)
            if self.gen.should_spawn(self.grid.cell_at(8, j))
        }
        self.assertTrue(expected_evicted)
        self.assertTrue(expected_spawned)
        self.assertEqual(evicted_cells, expected_evicted)
        self.assertEqual(spawned_cells, expected_spawned)

        for cell, cache in before.items():
            if cell.i == -8:
                self.assertNotIn(cell, self.manager.active)
                continue
            self.assertIs(self.manager.active[cell], cache)
            self.assertEqual(cache.tokens, before_tokens[cell])

        # only the evicted column was written to the store
        self.assertEqual(set(self.store.keys()), {c.key for c in expected_evicted})
        self.assertEqual({c.cell for c in self.view.removed}, expected_evicted)
        self.assertEqual({c.cell for c, _ in self.view.added}, expected_spawned)
        self.assertEqual(result.retained, len(before) - len(expected_evicted))

    def test_same_position_is_idempotent(self):
        self.manager.on_player_moved(Point(0.0, 0.0))
        before = dict(self.manager.active)
        self.view.reset()

        result = self.manager.on_player_moved(Point(0.00005, 0.00005))

        self.assertEqual(result.spawned, ())
        self.assertEqual(result.evicted, ())
        self.assertEqual(dict(self.manager.active), before)
        self.assertEqual(self.view.added, [])
        self.assertEqual(self.view.removed, [])

    def test_spawned_caches_use_grid_bounds(self):
        self.manager.on_player_moved(Point(0.0, 0.0))
        for cache, bounds in self.view.added:
            self.assertEqual(bounds, self.grid.cell_bounds(cache.cell))

    def test_active_caches_match_spawn_decision(self):
        self.manager.on_player_moved(Point(0.0, 0.0))
        window = self.grid.cells_near_point(Point(0.0, 0.0))
        expected = {c for c in window if self.gen.should_spawn(c)}
        self.assertEqual(set(self.manager.active), expected)
        for cell, cache in self.manager.active.items():
            self.assertEqual(cache.tokens, self.gen.fresh_tokens(cell))


class TestResumeAfterEviction(unittest.TestCase):
    """A cache mutated by the player comes back mutated."""

    def setUp(self):
        self.view = RecordingView()
        self.gen = ScriptedGenerator({(3, 4): ["3:4#1", "3:4#2"]})
        self.manager, self.grid, self.store = build_manager(self.gen, view=self.view, radius=2)
        self.home = Point(3.5, 4.5)
        self.far = Point(100.0, 100.0)

    def test_collect_then_leave_and_return(self):
        self.manager.on_player_moved(self.home)
        cache = self.manager.cache_at(self.grid.cell_at(3, 4))
        self.assertIsNotNone(cache)
        inventory = Inventory()

        token = self.manager.transfer(cache, inventory, TransferDirection.COLLECT)
        self.assertEqual(token, "3:4#2")

        result = self.manager.on_player_moved(self.far)
        self.assertEqual([c.cell for c in result.evicted], [cache.cell])
        self.assertEqual(self.store.restore("3,4"), ["3:4#1"])

        result = self.manager.on_player_moved(self.home)
        revived = self.manager.cache_at(self.grid.cell_at(3, 4))
        self.assertIsNot(revived, cache)
        self.assertEqual(revived.tokens, ["3:4#1"])
        self.assertEqual(result.resumed, 1)
        self.assertEqual(inventory.tokens, ["3:4#2"])
        # generated exactly once, resumed from the store afterwards
        self.assertEqual(len(self.gen.minted), 1)

    def test_untouched_cache_resumes_identical(self):
        self.manager.on_player_moved(self.home)
        self.manager.on_player_moved(self.far)
        self.manager.on_player_moved(self.home)
        cache = self.manager.cache_at(self.grid.cell_at(3, 4))
        self.assertEqual(cache.tokens, ["3:4#1", "3:4#2"])

    def test_emptied_cache_stays_empty(self):
        self.manager.on_player_moved(self.home)
        cache = self.manager.cache_at(self.grid.cell_at(3, 4))
        inventory = Inventory()
        self.manager.transfer(cache, inventory, TransferDirection.COLLECT)
        self.manager.transfer(cache, inventory, TransferDirection.COLLECT)
        self.manager.on_player_moved(self.far)
        self.manager.on_player_moved(self.home)
        self.assertEqual(self.manager.cache_at(self.grid.cell_at(3, 4)).tokens, [])
        self.assertEqual(len(self.gen.minted), 1)

    def test_notifications_pair_up(self):
        self.manager.on_player_moved(self.home)
        self.manager.on_player_moved(self.far)
        self.assertEqual(len(self.view.added), 1)
        self.assertEqual(self.view.removed, [self.view.added[0][0]])

    def test_transfer_on_stale_cache_rejected(self):
        self.manager.on_player_moved(self.home)
        stale = self.manager.cache_at(self.grid.cell_at(3, 4))
        self.manager.on_player_moved(self.far)
        with self.assertRaises(InactiveCacheError):
            self.manager.transfer(stale, Inventory(), TransferDirection.COLLECT)

    def test_transfer_on_foreign_cache_rejected(self):
        self.manager.on_player_moved(self.home)
        impostor = Cache(self.grid.cell_at(3, 4), ["3:4#1"])
        with self.assertRaises(InactiveCacheError):
            self.manager.transfer(impostor, Inventory(), TransferDirection.COLLECT)


class TestBulkOperations(unittest.TestCase):

    def setUp(self):
        self.view = RecordingView()
        self.gen = ScriptedGenerator({(0, 0): ["0:0#1"], (1, 1): ["1:1#1", "1:1#2"]})
        self.manager, self.grid, self.store = build_manager(self.gen, view=self.view, radius=2)

    def test_persist_all_keeps_caches_live(self):
        self.manager.on_player_moved(Point(0.5, 0.5))
        committed = self.manager.persist_all()
        self.assertEqual(committed, 2)
        self.assertEqual(self.store.restore("1,1"), ["1:1#1", "1:1#2"])
        self.assertEqual(len(self.manager.active), 2)
        self.assertEqual(self.view.removed, [])

    def test_reset_forgets_everything(self):
        self.manager.on_player_moved(Point(0.5, 0.5))
        cache = self.manager.cache_at(self.grid.cell_at(1, 1))
        self.manager.transfer(cache, Inventory(), TransferDirection.COLLECT)
        self.manager.reset()

        self.assertEqual(len(self.manager.active), 0)
        self.assertEqual(len(self.store), 0)
        self.assertEqual(len(self.view.removed), 2)

        self.manager.on_player_moved(Point(0.5, 0.5))
        self.assertEqual(self.manager.cache_at(self.grid.cell_at(1, 1)).tokens, ["1:1#1", "1:1#2"])

    def test_active_view_is_read_only(self):
        self.manager.on_player_moved(Point(0.5, 0.5))
        with self.assertRaises(TypeError):
            self.manager.active[self.grid.cell_at(9, 9)] = Cache(self.grid.cell_at(9, 9))
