"""Tests for the seeding CLI (python -m database.seeds.run_all_seeds)."""

import json
from unittest.mock import patch

import pytest

from database.seeds import run_all_seeds as cli
from database.seeds.data import DEFAULT_DATASET
from shared.config import Settings


@pytest.fixture(autouse=True)
def keep_logging_setup():
    with patch.object(cli, "configure_logging"):
        yield


@pytest.fixture
def dataset_file(tmp_path):
    path = tmp_path / "seed.json"
    path.write_text(json.dumps({
        "brands": ["Other"],
        "types": ["Mug"],
        "items": [{"name": "Plain Mug", "price": "4.50", "brand": "Other", "type": "Mug"}],
    }))
    return str(path)


def test_main_seeds_and_exits_zero(database_url, capsys):
    status = cli.main(["--database-url", database_url])

    assert status == 0
    out = capsys.readouterr().out
    assert "Seeding complete" in out
    assert "'items': 12" in out


def test_main_is_idempotent(database_url, capsys):
    assert cli.main(["--database-url", database_url]) == 0
    capsys.readouterr()

    assert cli.main(["--database-url", database_url]) == 0
    assert "'inserted': {'brands': 0, 'types': 0, 'items': 0, 'accounts': 0}" in capsys.readouterr().out


def test_main_with_dataset_file(database_url, dataset_file, capsys):
    status = cli.main(["--database-url", database_url, "--dataset", dataset_file])

    assert status == 0
    assert "'items': 1" in capsys.readouterr().out


def test_main_exits_one_on_malformed_url():
    assert cli.main(["--database-url", "not a database url", "--max-attempts", "1"]) == 1


def test_main_exits_one_when_tables_are_missing(database_url):
    assert cli.main(["--database-url", database_url, "--no-create-schema"]) == 1


def test_main_exits_one_on_invalid_dataset(database_url, tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json")

    assert cli.main(["--database-url", database_url, "--dataset", str(path)]) == 1


def test_configured_dataset_defaults_to_bundled_baseline():
    assert cli.load_configured_dataset(Settings(SEED_DATASET_PATH=None)) is DEFAULT_DATASET


def test_configured_dataset_reads_file(dataset_file):
    dataset = cli.load_configured_dataset(Settings(SEED_DATASET_PATH=dataset_file))

    assert [item["name"] for item in dataset.items] == ["Plain Mug"]


async def test_max_attempts_override(database_url):
    settings = Settings(DATABASE_URL=database_url, SEED_MAX_ATTEMPTS=7)

    report = await cli.run_all_seeds(settings, max_attempts=2, create_schema=True)

    assert report.connection_attempts == 1
    assert report.total_inserted == len(DEFAULT_DATASET)
