"""
Tests for the build-once cache and feature tag helpers.
"""
import threading
import time

from django.test import SimpleTestCase

from ..cache import BuildOnceCache
from ..features import FeatureTag, feature_value, normalize_features


class BuildOnceCacheTestCase(SimpleTestCase):
    """Test cases for the build-once cache."""

    def setUp(self):
        self.cache = BuildOnceCache('test')
        self.builds = 0

    def builder(self):
        self.builds += 1
        time.sleep(0.01)
        return {'built': self.builds}

    def test_value_is_built_once(self):
        first = self.cache.get_or_build(self.builder)
        second = self.cache.get_or_build(self.builder)

        self.assertIs(first, second)
        self.assertEqual(self.builds, 1)
        self.assertTrue(self.cache.is_built)

    def test_concurrent_callers_share_one_build(self):
        results = []

        def worker():
            results.append(self.cache.get_or_build(self.builder))

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        self.assertEqual(self.builds, 1)
        self.assertTrue(all(result is results[0] for result in results))

    def test_failed_build_is_retried(self):
        def failing():
            raise RuntimeError('boom')

        with self.assertRaises(RuntimeError):
            self.cache.get_or_build(failing)

        self.assertFalse(self.cache.is_built)
        self.assertEqual(self.cache.get_or_build(self.builder), {'built': 1})

    def test_invalidate(self):
        self.cache.get_or_build(self.builder)

        self.cache.invalidate()

        self.assertFalse(self.cache.is_built)
        self.assertEqual(self.cache.get_or_build(self.builder), {'built': 2})

    def test_none_is_a_built_value(self):
        builds = []

        def build_none():
            builds.append(1)
            return None

        self.assertIsNone(self.cache.get_or_build(build_none))
        self.assertIsNone(self.cache.get_or_build(build_none))

        self.assertTrue(self.cache.is_built)
        self.assertEqual(len(builds), 1)

    def test_reads_racing_invalidate_never_see_empty_value(self):
        """Test that readers always get a built value while another thread invalidates."""
        seen = []
        stop = threading.Event()

        def build():
            return {'built': True}

        def reader():
            while True:
                seen.append(self.cache.get_or_build(build))
                if stop.is_set():
                    break

        def invalidator():
            for _ in range(2000):
                self.cache.invalidate()
            stop.set()

        readers = [threading.Thread(target=reader) for _ in range(4)]
        for thread in readers:
            thread.start()
        invalidating = threading.Thread(target=invalidator)
        invalidating.start()
        invalidating.join()
        for thread in readers:
            thread.join()

        self.assertTrue(seen)
        self.assertNotIn(None, seen)
        self.assertTrue(all(value == {'built': True} for value in seen))


class FeatureTagTestCase(SimpleTestCase):

    def test_feature_value(self):
        self.assertEqual(feature_value(FeatureTag.PUSH_LEAD), 'push_lead')
        self.assertEqual(feature_value('custom'), 'custom')

    def test_normalize_features(self):
        self.assertEqual(normalize_features(None), set())
        self.assertEqual(normalize_features(FeatureTag.SHARE_BUTTON), {'share_button'})
        self.assertEqual(normalize_features('login_button'), {'login_button'})
        self.assertEqual(
            normalize_features([FeatureTag.PUBLIC_PROFILE, 'public_activity']),
            {'public_profile', 'public_activity'}
        )
