from hppoperator.labels import (
    APP_KUBERNETES_COMPONENT_LABEL,
    APP_KUBERNETES_MANAGED_BY_LABEL,
    APP_KUBERNETES_PART_OF_LABEL,
    APP_KUBERNETES_VERSION_LABEL,
    PART_OF_LABEL_ENV_VAR_NAME,
    VERSION_LABEL_ENV_VAR_NAME,
    get_recommended_labels,
)


def test_default_labels():
    assert get_recommended_labels({}) == {
        "k8s-app": "hostpath-provisioner",
        APP_KUBERNETES_MANAGED_BY_LABEL: "hostpath-provisioner-operator",
        APP_KUBERNETES_COMPONENT_LABEL: "storage",
    }


def test_installer_labels_from_environment():
    labels = get_recommended_labels(
        {PART_OF_LABEL_ENV_VAR_NAME: "testing", VERSION_LABEL_ENV_VAR_NAME: "v9"}
    )
    assert labels[APP_KUBERNETES_PART_OF_LABEL] == "testing"
    assert labels[APP_KUBERNETES_VERSION_LABEL] == "v9"
    assert labels["k8s-app"] == "hostpath-provisioner"


def test_empty_environment_values_are_ignored():
    labels = get_recommended_labels(
        {PART_OF_LABEL_ENV_VAR_NAME: "", VERSION_LABEL_ENV_VAR_NAME: ""}
    )
    assert APP_KUBERNETES_PART_OF_LABEL not in labels
    assert APP_KUBERNETES_VERSION_LABEL not in labels


def test_each_call_returns_a_new_dict():
    first = get_recommended_labels({})
    first["extra"] = "value"
    assert "extra" not in get_recommended_labels({})


def test_process_environment_is_default(monkeypatch):
    monkeypatch.setenv(PART_OF_LABEL_ENV_VAR_NAME, "from-env")
    monkeypatch.delenv(VERSION_LABEL_ENV_VAR_NAME, raising=False)
    labels = get_recommended_labels()
    assert labels[APP_KUBERNETES_PART_OF_LABEL] == "from-env"
    assert APP_KUBERNETES_VERSION_LABEL not in labels