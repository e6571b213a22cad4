"""
Verse Graph API — Collection Provisioning Tests
=================================================

What:  Tests for provision_collections() idempotence and warnings.
How:   MagicMock database from conftest whose collections live in a set.
"""

import logging

import pytest

from verse_graph.provisioning import main, provision_collections, required_collections


class TestProvisionCollections:

    def test_creates_missing_with_right_kind(self, mock_database):
        created = provision_collections(mock_database, production=False)

        assert created == ["verse", "source", "hasSource"]
        calls = [c.args + tuple(sorted(c.kwargs.items())) for c in mock_database.create_collection.call_args_list]
        assert calls == [
            ("verse", ("edge", False)),
            ("source", ("edge", False)),
            ("hasSource", ("edge", True)),
        ]

    def test_skips_existing(self, mock_database):
        mock_database.existing.update({"verse", "hasSource"})

        created = provision_collections(mock_database, production=False)

        assert created == ["source"]
        assert mock_database.create_collection.call_count == 1

    def test_second_run_creates_nothing(self, mock_database):
        provision_collections(mock_database, production=False)
        mock_database.create_collection.reset_mock()

        assert provision_collections(mock_database, production=False) == []
        mock_database.create_collection.assert_not_called()

    def test_warns_about_existing_in_production(self, mock_database, caplog):
        mock_database.existing.add("verse")

        with caplog.at_level(logging.WARNING, logger="verse_graph.provisioning"):
            provision_collections(mock_database, production=True)

        warnings = [r.getMessage() for r in caplog.records if r.levelno == logging.WARNING]
        assert warnings == ["collection verse already exists. Leaving it untouched."]

    def test_silent_about_existing_outside_production(self, mock_database, caplog):
        mock_database.existing.update({"verse", "source", "hasSource"})

        with caplog.at_level(logging.WARNING, logger="verse_graph.provisioning"):
            provision_collections(mock_database, production=False)

        assert not [r for r in caplog.records if r.levelno >= logging.WARNING]

    def test_failure_keeps_earlier_collections(self, mock_database):
        def create(name, edge=False):
            if name == "source":
                raise RuntimeError("disk full")
            mock_database.existing.add(name)

        mock_database.create_collection.side_effect = create

        with pytest.raises(RuntimeError):
            provision_collections(mock_database, production=False)

        assert mock_database.existing == {"verse"}

    def test_custom_names(self, mock_database):
        created = provision_collections(
            mock_database,
            document_collections=["chapter"],
            edge_collections=["inChapter"],
            production=False,
        )

        assert created == ["chapter", "inChapter"]


class TestRequiredCollections:

    def test_routed_collections_come_first(self):
        assert required_collections() == (["verse", "source"], ["hasSource"])

    def test_extras_are_appended_once(self):
        documents, edges = required_collections(["chapter", "verse"], ["hasSource", "inChapter"])

        assert documents == ["verse", "source", "chapter"]
        assert edges == ["hasSource", "inChapter"]


class TestProvisioningCli:

    def test_main_provisions_routed_collections(self, mock_database, monkeypatch):
        monkeypatch.setattr("verse_graph.database.connect", lambda **kwargs: mock_database)

        assert main(["--document", "verse", "--edge", "hasSource"]) == 0
        assert mock_database.existing == {"verse", "source", "hasSource"}

    def test_main_adds_extra_collections(self, mock_database, monkeypatch):
        monkeypatch.setattr("verse_graph.database.connect", lambda **kwargs: mock_database)

        assert main(["--document", "chapter", "--edge", "inChapter"]) == 0
        assert mock_database.existing == {"verse", "source", "chapter", "hasSource", "inChapter"}
