"""
Tests for the SeasonsMap and TVMap episode indexes.
"""

import pytest

from tvmatcher.index import SeasonsMap, TVMap
from tvmatcher.models import NO_SEASON, EpisodeMatch


class TestSeasonsMap:
    """Test the per-show season -> episode index."""

    def test_multi_episode_stored_under_each_number(self):
        double = EpisodeMatch("24", 1, [1, 2])
        seasons = SeasonsMap([double])
        assert seasons.get_episode(1, 1) is double
        assert seasons.get_episode(1, 2) is double
        assert seasons.get_season_episodes(1) == [double]

    def test_first_added_wins(self):
        first = EpisodeMatch("24", 1, [1])
        seasons = SeasonsMap([first, EpisodeMatch("24", 1, [1, 2])])
        assert seasons.get_episode(1, 1) is first
        assert seasons.get_episode(1, 2) == EpisodeMatch("24", 1, [1, 2])

    def test_season_episodes_sorted(self):
        seasons = SeasonsMap([
            EpisodeMatch("24", 1, [3]),
            EpisodeMatch("24", 1, [1, 2]),
            EpisodeMatch("24", 1, [4]),
        ])
        assert [m.episodes for m in seasons.get_season_episodes(1)] == [[1, 2], [3], [4]]

    def test_match_without_episodes_not_indexed(self):
        seasons = SeasonsMap([EpisodeMatch("24", 1)])
        assert seasons.is_empty()
        assert seasons.season_count() == 0
        assert not seasons.contains_season(1)

    def test_unknown_season(self):
        seasons = SeasonsMap([EpisodeMatch("24", 1, [1])])
        assert seasons.get_season_episodes(2) is None
        assert seasons.get_episode(2, 1) is None
        assert not seasons.contains(2, 1)

    def test_get_seasons_sorted(self):
        seasons = SeasonsMap([EpisodeMatch("24", s, [1]) for s in (3, 1, 2)])
        assert seasons.get_seasons() == [1, 2, 3]

    def test_season_count_excludes_no_season(self):
        seasons = SeasonsMap([
            EpisodeMatch("24", NO_SEASON, [1]),
            EpisodeMatch("24", 1, [1]),
        ])
        assert seasons.season_count() == 1
        assert seasons.season_count(include_no_season=True) == 2

    def test_remove_episode_removes_every_number(self):
        double = EpisodeMatch("24", 1, [1, 2])
        seasons = SeasonsMap([double, EpisodeMatch("24", 2, [1])])
        seasons.remove_episode(double)
        assert not seasons.contains(1, 1)
        assert not seasons.contains(1, 2)
        assert not seasons.contains_season(1)
        assert seasons.get_seasons() == [2]

    def test_remove_episode_subset_keeps_remainder(self):
        seasons = SeasonsMap([EpisodeMatch("24", 1, [1, 2, 3])])
        seasons.remove_episode_subset(EpisodeMatch("24", 1, [2]))
        assert seasons.get_episode(1, 1) == EpisodeMatch("24", 1, [1, 3])
        assert seasons.get_episode(1, 3) == EpisodeMatch("24", 1, [1, 3])
        assert not seasons.contains(1, 2)

    def test_remove_episode_subset_empties_season(self):
        seasons = SeasonsMap([EpisodeMatch("24", 1, [1, 2])])
        seasons.remove_episode_subset(EpisodeMatch("24", 1, [1, 2]))
        assert seasons.is_empty()

    def test_remove_missing_episode_is_noop(self):
        seasons = SeasonsMap([EpisodeMatch("24", 1, [1])])
        seasons.remove_episode(EpisodeMatch("24", 1, [5]))
        seasons.remove_episode_subset(EpisodeMatch("24", 3, [1]))
        assert seasons.contains(1, 1)

    def test_remove_season(self):
        seasons = SeasonsMap([EpisodeMatch("24", 1, [1]), EpisodeMatch("24", 2, [1])])
        seasons.remove_season(1)
        assert seasons.get_seasons() == [2]


class TestTVMap:
    """Test the show -> season -> episode index."""

    def test_match_without_episodes_not_indexed(self):
        tv_map = TVMap()
        tv_map.add_episode(EpisodeMatch("24", 1))
        assert tv_map.is_empty()
        assert not tv_map.contains_show("24")
        assert tv_map.show_count() == 0

    def test_add_episode(self):
        episode = EpisodeMatch("24", 1, [1])
        tv_map = TVMap()
        tv_map.add_episode(episode)
        assert episode in tv_map.get_season_episodes("24", 1)
        assert tv_map.season_count("24") == 1

    def test_add_episode_without_show(self):
        with pytest.raises(ValueError):
            TVMap().add_episode(EpisodeMatch(None, 1, [1]))

    def test_contains(self):
        episode = EpisodeMatch("24", 1, [1])
        tv_map = TVMap([episode])
        assert tv_map.contains_episode(episode)
        assert tv_map.contains("24", 1, 1)

        second = EpisodeMatch("24", 1, [2])
        assert not tv_map.contains_episode(second)
        tv_map.add_episode(second)
        assert tv_map.contains_episode(second)
        tv_map.remove_episode(second)
        assert not tv_map.contains_episode(second)

    def test_show_lookup_ignores_case(self):
        tv_map = TVMap([EpisodeMatch("The Office (US)", 1, [1])])
        tv_map.add_episode(EpisodeMatch("the office (us)", 1, [2]))
        assert tv_map.show_count() == 1
        assert tv_map.contains("THE OFFICE (US)", 1, 2)
        assert tv_map.contains_show("the Office (us)")
        assert tv_map.get_shows() == {"The Office (US)"}

    def test_get_shows(self):
        tv_map = TVMap([EpisodeMatch("24", 1, [1]), EpisodeMatch("Scrubs", 2, [1])])
        assert tv_map.get_shows() == {"24", "Scrubs"}

    def test_get_episodes(self):
        one = EpisodeMatch("24", 1, [1])
        two = EpisodeMatch("24", 1, [2])
        tv_map = TVMap([one, two])
        assert tv_map.get_episodes("24") == {one, two}
        assert tv_map.get_episodes("Lost") == set()

    def test_get_episode(self):
        double = EpisodeMatch("24", 1, [1, 2])
        tv_map = TVMap([double])
        assert tv_map.get_episode("24", 1, 2) is double
        assert tv_map.get_episode("24", 1, 3) is None
        assert tv_map.get_episode("Lost", 1, 1) is None

    def test_get_seasons(self):
        tv_map = TVMap([EpisodeMatch("24", s, [1]) for s in (1, 2)])
        assert tv_map.get_seasons("24") == {1, 2}
        assert tv_map.contains_season("24", 2)
        assert not tv_map.contains_season("24", 3)
        assert tv_map.get_seasons("Lost") == set()

    def test_season_count_follows_removal(self):
        episodes = [EpisodeMatch("24", s, [1]) for s in (1, 2, 3)]
        tv_map = TVMap()
        for i, episode in enumerate(episodes, start=1):
            tv_map.add_episode(episode)
            assert tv_map.season_count("24") == i
        for i in range(len(episodes) - 1, -1, -1):
            tv_map.remove_episode(episodes[i])
            assert tv_map.season_count("24") == i

    def test_season_count_no_season(self):
        tv_map = TVMap([
            EpisodeMatch("24", NO_SEASON, [1]),
            EpisodeMatch("24", 1, [1]),
            EpisodeMatch("24", 2, [1]),
        ])
        assert tv_map.season_count("24") == 2
        assert tv_map.season_count("24", include_no_season=True) == 3

    def test_get_season_episodes(self):
        one = EpisodeMatch("24", 1, [1])
        tv_map = TVMap([one, EpisodeMatch("24", 2, [2])])
        assert tv_map.get_season_episodes("24", 1) == {one}
        assert tv_map.get_season_episodes("24", 5) == set()

    def test_replace_episode(self):
        old = EpisodeMatch("24", 1, [1])
        replacement = EpisodeMatch("24", 2, [1])
        tv_map = TVMap([old])
        tv_map.replace_episode(old, replacement)
        assert not tv_map.contains_episode(old)
        assert tv_map.contains_episode(replacement)

    def test_remove_all(self):
        one = EpisodeMatch("24", 1, [1])
        two = EpisodeMatch("24", 2, [2])
        three = EpisodeMatch("24", 3, [3])
        tv_map = TVMap([one, two, three])
        tv_map.remove_all([one, two])
        assert not tv_map.contains_episode(one)
        assert not tv_map.contains_episode(two)
        assert tv_map.contains_episode(three)

    def test_remove_all_shrinks_multi_episode(self):
        tv_map = TVMap([EpisodeMatch("24", 1, [1, 2])])
        tv_map.remove_all([EpisodeMatch("24", 1, [2])])
        assert tv_map.get_episode("24", 1, 1) == EpisodeMatch("24", 1, [1])

    def test_remove_show(self):
        tv_map = TVMap([
            EpisodeMatch("24", 1, [2]),
            EpisodeMatch("24", 1, [3]),
            EpisodeMatch("Scrubs", 2, [1]),
        ])
        tv_map.remove_show("24")
        assert tv_map.get_shows() == {"Scrubs"}

    def test_remove_season(self):
        tv_map = TVMap([EpisodeMatch("24", 1, [1]), EpisodeMatch("24", 2, [1])])
        tv_map.remove_season("24", 1)
        assert tv_map.get_seasons("24") == {2}
        tv_map.remove_season("24", 2)
        assert not tv_map.contains_show("24")
        assert tv_map.is_empty()

    def test_remove_episode_compacts(self):
        episode = EpisodeMatch("24", 1, [2])
        tv_map = TVMap([episode])
        assert tv_map.season_count("24") == 1
        assert tv_map.show_count() == 1
        tv_map.remove_episode(episode)
        assert not tv_map.contains_episode(episode)
        assert tv_map.season_count("24") == 0
        assert tv_map.show_count() == 0

    def test_remove_episode_subset(self):
        tv_map = TVMap([EpisodeMatch("24", 1, [1, 2])])
        tv_map.remove_episode_subset(EpisodeMatch("24", 1, [2]))
        assert tv_map.contains_episode(EpisodeMatch("24", 1, [1]))
        assert not tv_map.contains("24", 1, 2)

    def test_show_count(self):
        episodes = [EpisodeMatch(show, 1, [1]) for show in ("24", "Scrubs", "Friends")]
        tv_map = TVMap()
        for i, episode in enumerate(episodes, start=1):
            tv_map.add_episode(episode)
            assert tv_map.show_count() == i
        for i in range(len(episodes) - 1, -1, -1):
            tv_map.remove_show(episodes[i].show)
            assert tv_map.show_count() == i
