"""Unit tests for polymorphic type resolution."""

from __future__ import annotations

from abc import ABC, abstractmethod
from types import SimpleNamespace
from typing import Annotated

import pytest

from doc_mapper.core.exceptions import TypeNotFoundError, UnresolvableDiscriminatorError
from doc_mapper.mapping.discriminator import resolve
from doc_mapper.mapping.markers import Persist, discriminator, discriminator_of
from doc_mapper.mapping.model import Document, from_document
from doc_mapper.mapping.registry import TypeRegistry


@discriminator("kind", {"vehicle": "VehicleAsset", "land": "LandAsset", "ghost": "GhostAsset"})
class Asset(Document):
    kind: Annotated[str, Persist()] = ""
    name: Annotated[str, Persist()] = ""


@discriminator("wheels", {2: "BikeAsset", 4: "CarAsset", 0: "VehicleAsset"})
class VehicleAsset(Asset):
    wheels: Annotated[int, Persist()] = 0


class CarAsset(VehicleAsset):
    doors: Annotated[int, Persist()] = 4


class BikeAsset(VehicleAsset):
    pass


class LandAsset(Asset):
    hectares: Annotated[float, Persist()] = 0.0


class Estate(Document):
    assets: Annotated[list[Asset], Persist()]
    main: Annotated[Asset | None, Persist()] = None


@discriminator("t", {"x": "LoopB"})
class LoopA(Document):
    pass


@discriminator("t", {"x": "LoopA"})
class LoopB(LoopA):
    pass


class Figure(Document, ABC):
    @abstractmethod
    def area(self) -> float: ...


@discriminator("family", {"x": "ChainPolygon"})
class ChainShape(Document, ABC):
    family: Annotated[str, Persist()] = ""

    @abstractmethod
    def sides(self) -> int: ...


@discriminator("kind", {"y": "ChainTriangle"})
class ChainPolygon(ChainShape):
    kind: Annotated[str, Persist()] = ""


class ChainTriangle(ChainPolygon):
    def sides(self) -> int:
        return 3


@discriminator("model", {"jet": "test-jet"})
class Aircraft(Document):
    pass


class Jet(Aircraft):
    pass


class TestDiscriminatorMap:
    def test_map_is_not_inherited(self) -> None:
        assert discriminator_of(Asset) is not None
        assert discriminator_of(LandAsset) is None

    def test_subclass_declares_own_map(self) -> None:
        table = discriminator_of(VehicleAsset)
        assert table is not None
        assert table.type_property == "wheels"


class TestResolve:
    def test_plain_class_resolves_to_itself(self) -> None:
        assert resolve({}, LandAsset) is LandAsset

    def test_single_step(self) -> None:
        assert resolve({"kind": "land"}, Asset) is LandAsset

    def test_chained_maps(self) -> None:
        assert resolve({"kind": "vehicle", "wheels": 4}, Asset) is CarAsset
        assert resolve({"kind": "vehicle", "wheels": 2}, Asset) is BikeAsset

    def test_entry_naming_the_class_itself_stops(self) -> None:
        assert resolve({"kind": "vehicle", "wheels": 0}, Asset) is VehicleAsset

    def test_attribute_record(self) -> None:
        assert resolve(SimpleNamespace(kind="land"), Asset) is LandAsset

    def test_missing_type_property(self) -> None:
        with pytest.raises(UnresolvableDiscriminatorError) as exc_info:
            resolve({"name": "x"}, Asset)
        assert exc_info.value.type_name == "Asset"

    def test_missing_nested_type_property(self) -> None:
        with pytest.raises(UnresolvableDiscriminatorError) as exc_info:
            resolve({"kind": "vehicle"}, Asset)
        assert exc_info.value.type_name == "VehicleAsset"

    def test_unmatched_value(self) -> None:
        with pytest.raises(UnresolvableDiscriminatorError):
            resolve({"kind": "boat"}, Asset)

    def test_unhashable_value(self) -> None:
        with pytest.raises(UnresolvableDiscriminatorError):
            resolve({"kind": ["land"]}, Asset)

    def test_unknown_type_name(self) -> None:
        with pytest.raises(UnresolvableDiscriminatorError) as exc_info:
            resolve({"kind": "ghost"}, Asset)
        assert isinstance(exc_info.value.__cause__, TypeNotFoundError)

    def test_cycle(self) -> None:
        with pytest.raises(UnresolvableDiscriminatorError):
            resolve({"t": "x"}, LoopA)

    def test_abstract_without_map(self) -> None:
        with pytest.raises(UnresolvableDiscriminatorError):
            resolve({}, Figure)

    def test_custom_registry_alias(self, registry: TypeRegistry) -> None:
        registry.register(Jet, name="test-jet")
        assert resolve({"model": "jet"}, Aircraft, registry) is Jet

    def test_alias_unknown_to_default_registry(self) -> None:
        with pytest.raises(UnresolvableDiscriminatorError):
            resolve({"model": "jet"}, Aircraft)


class TestPolymorphicDeserialization:
    def test_from_document_builds_concrete_class(self) -> None:
        asset = from_document({"kind": "vehicle", "wheels": 4, "name": "Van", "doors": 5}, Asset)
        assert type(asset) is CarAsset
        assert (asset.name, asset.wheels, asset.doors) == ("Van", 4, 5)

    def test_polymorphic_field_elements(self) -> None:
        estate = from_document(
            {
                "assets": [
                    {"kind": "land", "hectares": 2.5},
                    {"kind": "vehicle", "wheels": 2},
                ],
                "main": {"kind": "land"},
            },
            Estate,
        )
        assert [type(a) for a in estate.assets] == [LandAsset, BikeAsset]
        assert estate.assets[0].hectares == 2.5
        assert type(estate.main) is LandAsset

    def test_abstract_two_level_chain(self) -> None:
        shape = from_document({"family": "x", "kind": "y"}, ChainShape)
        assert type(shape) is ChainTriangle
        assert shape.sides() == 3
        assert (shape.family, shape.kind) == ("x", "y")
