"""Unit tests for attribute map conversion and nested field access."""

from dataclasses import dataclass

import pytest
from kubernetes import client
from pydantic import BaseModel, Field

from projectlens.core.exceptions import ConversionError, InvalidFieldError
from projectlens.services.unstructured import (nested_field, nested_map,
                                               nested_slice, nested_string,
                                               to_attribute_map)


class RoleRefModel(BaseModel):
    api_group: str = Field("rbac.authorization.k8s.io", alias="apiGroup")
    name: str


@dataclass
class Binding:
    namespace: str
    role: str


@pytest.mark.unit
class TestToAttributeMap:
    """Test conversion of structured objects."""

    def test_dict_passes_through(self):
        data = {"spec": {"roleBindings": [{"namespace": "ns1"}]}}

        assert to_attribute_map(data) == data

    def test_kubernetes_model_keeps_declared_names(self):
        role = client.V1ClusterRole(
            metadata=client.V1ObjectMeta(name="viewer"),
            rules=[
                client.V1PolicyRule(
                    api_groups=["kubevirt.io"],
                    resources=["virtualmachines"],
                    resource_names=["vm-1"],
                    verbs=["get"],
                )
            ],
        )

        data = to_attribute_map(role)

        assert data["metadata"] == {"name": "viewer"}
        assert data["rules"][0]["apiGroups"] == ["kubevirt.io"]
        assert data["rules"][0]["resourceNames"] == ["vm-1"]

    def test_pydantic_model_uses_aliases(self):
        assert to_attribute_map(RoleRefModel(name="kubevirt.io:view")) == {
            "apiGroup": "rbac.authorization.k8s.io",
            "name": "kubevirt.io:view",
        }

    def test_dataclass(self):
        assert to_attribute_map(Binding("ns1", "view")) == {
            "namespace": "ns1",
            "role": "view",
        }

    @pytest.mark.parametrize("obj", [None, 42, "spec", ["a"], object()])
    def test_unconvertible(self, obj):
        with pytest.raises(ConversionError):
            to_attribute_map(obj)

    def test_dataclass_type_is_not_an_instance(self):
        with pytest.raises(ConversionError):
            to_attribute_map(Binding)


@pytest.mark.unit
class TestNestedAccess:
    """Test typed access into nested maps."""

    OBJ = {
        "spec": {
            "roleBindings": [{"namespace": "ns1"}],
            "roleRef": {"name": "kubevirt.io:view"},
            "count": 3,
            "nothing": None,
        }
    }

    def test_nested_field(self):
        assert nested_field(self.OBJ, "spec", "count") == (3, True)
        assert nested_field(self.OBJ, "spec", "missing") == (None, False)
        assert nested_field(self.OBJ, "missing", "deeper") == (None, False)

    def test_nested_field_through_non_map(self):
        with pytest.raises(InvalidFieldError) as exc_info:
            nested_field(self.OBJ, "spec", "count", "deeper")

        assert exc_info.value.path == ("spec", "count")
        assert exc_info.value.expected == "map"

    def test_nested_slice(self):
        assert nested_slice(self.OBJ, "spec", "roleBindings") == (
            [{"namespace": "ns1"}],
            True,
        )
        assert nested_slice(self.OBJ, "spec", "other") == (None, False)
        assert nested_slice(self.OBJ, "spec", "nothing") == (None, False)
        with pytest.raises(InvalidFieldError):
            nested_slice(self.OBJ, "spec", "roleRef")

    def test_nested_map(self):
        assert nested_map(self.OBJ, "spec", "roleRef") == (
            {"name": "kubevirt.io:view"},
            True,
        )
        with pytest.raises(InvalidFieldError):
            nested_map(self.OBJ, "spec", "roleBindings")

    def test_nested_string(self):
        assert nested_string(self.OBJ, "spec", "roleRef", "name") == (
            "kubevirt.io:view",
            True,
        )
        with pytest.raises(InvalidFieldError) as exc_info:
            nested_string(self.OBJ, "spec", "count")

        assert exc_info.value.actual == "int"
        assert "spec.count" in str(exc_info.value)
