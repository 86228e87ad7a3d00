from typing import Annotated, Any, Mapping, Optional

from conjure import Configurable, ParameterDescriptor, configuration_parameter, describe


class Dependency:
    pass


class Service:
    def __init__(self, dep: Dependency, name: str, retries=3, fallback: Optional[Dependency] = None):
        pass


class Configured(Configurable):
    def __init__(self, dep: Dependency, config: Optional[Mapping[str, Any]] = None):
        super().__init__(config)


class PlainWithDict:
    def __init__(self, options: Optional[dict] = None):
        pass


class ConfigurableWithRequiredLast(Configurable):
    def __init__(self, dep: Dependency, label: str = "x"):
        super().__init__()


class NamedDefault(Configurable):
    def __init__(self, name=None):
        super().__init__()


class UntypedOptions(Configurable):
    def __init__(self, options={}):  # noqa: B006
        super().__init__(options)


class NoConstructor:
    pass


class Qualified:
    def __init__(self, dep: Annotated[Dependency, "primary"]):
        pass


class Unresolvable:
    def __init__(self, dep: "MissingType", other: Dependency):  # noqa: F821
        pass


class ParameterKinds:
    def __init__(self, first, /, second, *args, third=None, **kwargs):
        pass


def test_describes_parameters_in_order():
    assert describe(Service) == (
        ParameterDescriptor(0, "dep", Dependency, False),
        ParameterDescriptor(1, "name", None, False),
        ParameterDescriptor(2, "retries", None, True, 3),
        ParameterDescriptor(3, "fallback", Dependency, True, None),
    )


def test_description_is_memoised():
    assert describe(Service) is describe(Service)


def test_configurable_payload_parameter_is_excluded():
    assert [p.name for p in describe(Configured)] == ["dep"]
    assert configuration_parameter(Configured) == "config"


def test_inherited_configurable_constructor_takes_payload():
    class Inherits(Configurable):
        pass

    assert describe(Inherits) == ()
    assert configuration_parameter(Inherits) == "config"


def test_mapping_parameter_of_plain_class_is_kept():
    assert [p.name for p in describe(PlainWithDict)] == ["options"]
    assert configuration_parameter(PlainWithDict) is None


def test_payload_requires_empty_default():
    assert [p.name for p in describe(ConfigurableWithRequiredLast)] == ["dep", "label"]
    assert configuration_parameter(ConfigurableWithRequiredLast) is None


def test_class_without_constructor_has_no_parameters():
    assert describe(NoConstructor) == ()
    assert configuration_parameter(NoConstructor) is None


def test_annotated_hint_is_unwrapped():
    assert describe(Qualified)[0].type_hint is Dependency


def test_unresolvable_hints_are_ignored():
    assert [p.type_hint for p in describe(Unresolvable)] == [None, None]


def test_only_positional_parameters_are_described():
    parameters = describe(ParameterKinds)

    assert [p.name for p in parameters] == ["first", "second"]
    assert [p.keyword for p in parameters] == [False, True]


def test_untyped_none_default_is_not_a_payload():
    assert [p.name for p in describe(NamedDefault)] == ["name"]
    assert configuration_parameter(NamedDefault) is None


def test_untyped_empty_mapping_default_is_a_payload():
    assert describe(UntypedOptions) == ()
    assert configuration_parameter(UntypedOptions) == "options"
