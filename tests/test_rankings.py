"""
Tests for the read-side ranking projections.
"""
from fleet_km.crews import adjust
from fleet_km.ledger import normalize
from fleet_km.rankings import RankingEntry, crew_label, project
from fleet_km.records import CrewGroup


class TestProject:
    def setup_method(self):
        self.dataset = normalize([
            {"Driver": "Ann", "Total": 100, "distance with Bob": 40},
            {"Driver": "Bob", "Total": 90, "distance with Ann": 40, "distance with Cid": 20},
            {"Driver": "Cid", "Total": 120, "distance with Bob": 20},
            {"Driver": "Dan", "Total": 30, "distance with Eve": 5},
        ])
        self.groups = [CrewGroup("1", ["Ann", "Bob"]), CrewGroup("2", ["Dan", "Ghost"])]
        self.roster = ["Ann", "Bob", "Dan"]
        self.adjusted = adjust(self.dataset.drivers, self.groups, self.roster)

    def test_system_ranking_filters_and_sorts(self):
        r = project(self.adjusted, ["cid", "ANN", "Nobody"], self.groups, self.roster)
        assert r.system == [RankingEntry("Cid", 120), RankingEntry("Ann", 100 - 40 + 60)]

    def test_crew_ranking_uses_group_maximum(self):
        r = project(self.adjusted, [], self.groups, self.roster)
        assert r.crew == [
            RankingEntry("Crew 1: Ann + Bob", 60),
            RankingEntry("Crew 2: Dan + Ghost", 5),
        ]

    def test_top_shared_leaves_out_double_crew(self):
        r = project(self.adjusted, [], self.groups, self.roster)
        assert [e.name for e in r.top_shared] == ["Cid"]

    def test_top_charts_are_cut(self):
        r = project(self.adjusted, [], self.groups, self.roster, top_n=2)
        assert [e.name for e in r.top_total] == ["Cid", "Ann"]
        assert r.top_total[1].distance == 120
        assert [e.name for e in r.top_solo] == ["Cid", "Ann"]
        assert len(r.top_shared) == 1

    def test_projection_does_not_touch_the_ledger(self):
        before = list(self.adjusted)
        project(self.adjusted, ["Ann"], self.groups, self.roster)
        assert self.adjusted == before

    def test_empty_rosters(self):
        plain = adjust(self.dataset.drivers, [], [])
        r = project(plain, [], [])
        assert r.system == []
        assert r.crew == []
        assert len(r.top_shared) == 4


def test_crew_label():
    assert crew_label(CrewGroup("3", ["A", "B", "C"])) == "Crew 3: A + B + C"
