"""
Loader, sources, parsers and version registry tests
"""
import json
import logging

import pytest
import requests

from weapon_calculator.errors import UnknownRegulationVersionError
from weapon_calculator.io import DictSource, FileSource, Loader, UrlSource, load_regulation_data, regulation_source
from weapon_calculator.io.parsers import parse_attributes, parse_regulation_payload
from weapon_calculator.models import Attribute
from weapon_calculator.versions import (
    DEFAULT_REGULATION_VERSION,
    REGULATION_VERSIONS,
    get_regulation_version,
)


class TestRegulationVersions:
    def test_default_is_registered(self):
        assert DEFAULT_REGULATION_VERSION in REGULATION_VERSIONS

    def test_lookup(self):
        version = get_regulation_version("reforged")
        assert version.disable_two_handing_attack_power_bonus is True
        assert version.affinity_options[16] == "Magma"

    def test_unknown_key(self):
        with pytest.raises(UnknownRegulationVersionError) as exc_info:
            get_regulation_version("patch-0.1")
        assert isinstance(exc_info.value, KeyError)
        assert "patch-0.1" in str(exc_info.value)

    def test_max_regular_upgrade_level(self):
        assert get_regulation_version("latest").max_regular_upgrade_level == 25
        assert get_regulation_version("convergence").max_regular_upgrade_level == 15

    def test_calculation_options(self):
        options = get_regulation_version("convergence").calculation_options()
        assert options == {
            "disable_two_handing_attack_power_bonus": False,
            "ineffective_attribute_penalty": 0.4,
            "split_spell_scaling": True,
        }


class TestParsers:
    def test_regulation_payload_requires_tables(self, regulation_data):
        del regulation_data["reinforceTypes"]
        with pytest.raises(ValueError):
            parse_regulation_payload(regulation_data)

    def test_regulation_payload_must_be_object(self):
        with pytest.raises(TypeError):
            parse_regulation_payload([])

    def test_weapon_records_need_references(self, regulation_data):
        del regulation_data["weapons"][0]["reinforceTypeId"]
        with pytest.raises(ValueError):
            parse_regulation_payload(regulation_data)

    def test_attributes(self):
        attributes = parse_attributes({"str": 10, "dex": "20", "int": 9, "fai": 99, "arc": 1})
        assert attributes[Attribute.DEX] == 20
        assert list(attributes) == list(Attribute)

    @pytest.mark.parametrize(
        "data",
        [
            {"str": 10, "dex": 10, "int": 10, "fai": 10},
            {"str": 0, "dex": 10, "int": 10, "fai": 10, "arc": 10},
            {"str": 100, "dex": 10, "int": 10, "fai": 10, "arc": 10},
            {"str": "lots", "dex": 10, "int": 10, "fai": 10, "arc": 10},
        ],
    )
    def test_invalid_attributes(self, data):
        with pytest.raises(ValueError):
            parse_attributes(data)


class TestLoader:
    def test_load_regulation_from_memory(self, regulation_data):
        regulation = Loader().load_regulation(DictSource(regulation_data))
        assert len(regulation.weapons) == 7

    def test_load_regulation_from_file(self, tmp_path, regulation_data):
        path = tmp_path / "regulation.json"
        path.write_text(json.dumps(regulation_data), encoding="utf-8")
        regulation = Loader().load_regulation(str(path))
        assert regulation.weapons[0].name == "Dagger"

    def test_version_caps_upgrade_levels(self, regulation_data):
        regulation = Loader().load_regulation(DictSource(regulation_data), get_regulation_version("convergence"))
        assert regulation.weapons[0].max_upgrade_level == 15

    def test_missing_file_logged_and_raised(self, tmp_path, caplog):
        logger = logging.getLogger("test.loader")
        with caplog.at_level(logging.ERROR, logger="test.loader"):
            with pytest.raises(FileNotFoundError):
                Loader(logger).load_json(tmp_path / "nope.json")
        assert "File not found" in caplog.text

    def test_weapon_list_round_trip(self, regulation):
        loader = Loader()
        payload = json.loads(json.dumps(loader.dump_weapon_list(list(regulation.weapons))))
        assert loader.load_weapon_list(DictSource(payload)) == list(regulation.weapons)


class TestLoadRegulationData:
    def test_from_data_dir(self, data_dir):
        regulation = load_regulation_data("latest", data_dir=data_dir, base_url="")
        assert len(regulation.weapons) == 7

    def test_unknown_version(self, data_dir):
        with pytest.raises(UnknownRegulationVersionError):
            load_regulation_data("patch-0.1", data_dir=data_dir, base_url="")

    def test_missing_dataset(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_regulation_data("reforged", data_dir=tmp_path, base_url="")

    def test_source_selection(self, tmp_path):
        version = get_regulation_version("latest")
        file_source = regulation_source(version, data_dir=tmp_path, base_url="")
        assert isinstance(file_source, FileSource)
        assert file_source.path == tmp_path / version.data_file

        url_source = regulation_source(version, base_url="https://example.test/data/")
        assert isinstance(url_source, UrlSource)
        assert url_source.url == f"https://example.test/data/{version.data_file}"

    def test_from_url(self, monkeypatch, regulation_data):
        calls = []

        class FakeResponse:
            def raise_for_status(self):
                pass

            def json(self):
                return regulation_data

        def fake_get(url, timeout):
            calls.append(url)
            return FakeResponse()

        monkeypatch.setattr(requests, "get", fake_get)
        regulation = load_regulation_data("latest", base_url="https://example.test")

        assert len(regulation.weapons) == 7
        assert calls == [f"https://example.test/{get_regulation_version('latest').data_file}"]
