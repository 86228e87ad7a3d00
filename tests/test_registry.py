import pytest

from conjure.errors import ConfigurationError
from conjure.registry import BindingRegistry, split_descriptor


class Mailer:
    pass


@pytest.fixture
def registry():
    return BindingRegistry()


def test_split_descriptor_separates_class_flag_and_properties():
    assert split_descriptor({"class": "/app/Mailer", "singleton": True, "host": "smtp"}) == (
        "app.Mailer",
        True,
        {"host": "smtp"},
    )


def test_split_descriptor_does_not_modify_its_argument():
    descriptor = {"class": Mailer, "host": "smtp"}
    split_descriptor(descriptor)

    assert descriptor == {"class": Mailer, "host": "smtp"}


def test_split_descriptor_rejects_invalid_class():
    with pytest.raises(ConfigurationError, match="'class' must be a class or class name"):
        split_descriptor({"class": 42})


def test_record_is_stored_by_alias_and_class_name(registry):
    record = registry.register("mailer", {"class": "app.Mailer", "host": "smtp"})

    assert registry.get("mailer") is record
    assert registry.get("app.Mailer") is record
    assert record.properties == {"host": "smtp"}
    assert not record.singleton


def test_alias_spellings_are_normalised(registry):
    registry.register("\\app\\mailer", {"class": Mailer})

    assert registry.exists("app/mailer")
    assert registry.get("app.mailer").alias == "app.mailer"


def test_class_is_shorthand_for_descriptor(registry):
    record = registry.register("mailer", Mailer)

    assert record.target is Mailer
    assert record.class_name == f"{Mailer.__module__}.Mailer"
    assert registry.get(Mailer) is record


def test_factory_is_stored_by_alias_only(registry):
    def make_mailer():
        return Mailer()

    record = registry.register("mailer", make_mailer)

    assert record.is_factory
    assert record.class_name is None
    assert registry.all() == {}
    assert registry.all(by_alias=True) == {"mailer": record}


def test_reregistering_alias_replaces_class_entry(registry):
    registry.register("svc", {"class": "app.Old"})
    replacement = registry.register("svc", {"class": "app.New", "singleton": True})

    assert registry.get("app.Old") is None
    assert registry.get("app.New") is replacement
    assert registry.is_singleton("svc")
    assert registry.count() == 1


def test_remove_by_alias_returns_removed_aliases(registry):
    registry.register("svc", {"class": "app.Mailer"})

    assert registry.remove("svc") == ["svc"]
    assert not registry.exists("app.Mailer")
    assert registry.count() == 0


def test_remove_by_class_name_drops_every_alias(registry):
    registry.register("svc", {"class": "app.Mailer"})

    assert registry.remove("app.Mailer") == ["app.Mailer", "svc"]
    assert not registry.exists("svc")


def test_clear_forgets_everything(registry):
    registry.register("a", {"class": "app.A"})
    registry.register("b", lambda: None)
    registry.clear()

    assert registry.count() == 0
    assert registry.all(by_alias=True) == {}
