# hppoperator

Building blocks for an operator that runs a hostpath storage provisioner on
Kubernetes: the manifests it applies, the rules it uses to name and merge
resources, and the TLS policy of its webhook server.

Everything here works on plain Python dictionaries shaped like Kubernetes
objects, so the results can be dumped to YAML or JSON, compared, or handed to
any client library.

## Installation

```
pip install hppoperator
```

For running the test suite:

```
pip install "hppoperator[test]"
pytest
```

## What is inside

| Module | Purpose |
| --- | --- |
| `hppoperator.version` | Read and parse the operator version (`get_version`, `get_version_from_string`, `get_string_from_file`). |
| `hppoperator.labels` | The recommended label set for every managed resource (`get_recommended_labels`). |
| `hppoperator.naming` | Length-limited, hash-shortened resource names, last-applied-configuration bookkeeping and three-way merging of objects (`get_resource_name_with_max_length`, `fnv_hash`, `set_last_applied_configuration`, `merge_object`, `merge_labels_and_annotations`, `get_namespace`, `MergeError`). |
| `hppoperator.cryptopolicy` | TLS minimum version and cipher suite selection from environment variables (`get_tls_version`, `cipher_suite_ids`, `webhook_tls_options`, `TLSOptions`). |
| `hppoperator.manifests` | Write an object as a YAML document without creation timestamps or status (`marshall_object`). |
| `hppoperator.scc` | Security context constraints for the legacy and CSI provisioners (`security_context_constraints`, `csi_security_context_constraints`). |
| `hppoperator.rbac` | Cluster roles, roles and their bindings, including the snapshot rules (`cluster_role_binding`, `role_binding`, `provisioner_cluster_role`, `csi_cluster_role`, `snapshot_csi_cluster_rules`, `provisioner_role`). |
| `hppoperator.helper` | The operator deployment and the custom resource definition built from their YAML manifests (`OperatorArgs`, `create_operator_deployment`, `create_crd_def`). |
| `hppoperator.dumper` | Export custom resource definitions to YAML files (`dump_crds`). |

## Examples

Parse a version string, with or without a leading `v`:

```python
from hppoperator.version import get_version_from_string

print(get_version_from_string("v0.0.1"))  # 0.0.1
```

Names longer than Kubernetes allows are shortened with a stable FNV-1a hash:

```python
from hppoperator.naming import get_resource_name_with_max_length

print(get_resource_name_with_max_length("hpp-pool", "local-node1", 63))  # hpp-pool-local-node1
print(get_resource_name_with_max_length("hpp-pool", "x" * 80, 63))
```

Labels put on every managed object; the part-of and version labels come from
`INSTALLER_PART_OF_LABEL` and `INSTALLER_VERSION_LABEL` when they are set:

```python
from hppoperator.labels import get_recommended_labels

labels = get_recommended_labels({"INSTALLER_PART_OF_LABEL": "testing"})
print(labels["app.kubernetes.io/part-of"])  # testing
```

Merge a desired object into one found on the cluster, keeping what users added:

```python
from hppoperator.naming import merge_object, set_last_applied_configuration
from hppoperator.rbac import provisioner_role

desired = provisioner_role("hostpath-provisioner-admin-csi", "hpp", {})
set_last_applied_configuration(desired)
merged = merge_object(desired, found)  # found: the object as read from the cluster
```

Write a manifest to standard output:

```python
import sys

from hppoperator.manifests import marshall_object
from hppoperator.rbac import csi_cluster_role

marshall_object(csi_cluster_role("hostpath-provisioner-admin-csi", True, {}), sys.stdout)
```

## Command

`hpp-yaml-dumper` reads the custom resource definition from the first
document of a YAML manifest and writes it, without its conversion settings,
to a file named after the definition:

```
hpp-yaml-dumper --crd-file crd.yaml --export-path schemas
```

`--export-path` is created if it does not exist; without it the file is
written to the current directory. Run `hpp-yaml-dumper --help` for the options.

## Environment

| Variable | Effect |
| --- | --- |
| `INSTALLER_PART_OF_LABEL` | Value of the `app.kubernetes.io/part-of` label. |
| `INSTALLER_VERSION_LABEL` | Value of the `app.kubernetes.io/version` label. |
| `TLS_CIPHERS_OVERRIDE`, `TLS_CIPHERS` | Comma-separated cipher suite names for the webhook server. |
| `TLS_MIN_VERSION_OVERRIDE`, `TLS_MIN_VERSION` | Minimum TLS version, such as `VersionTLS12`. |

Functions that read these take an `environ` mapping, so they can be called with
`os.environ` or with a plain dictionary.

## What this package does not do

- It does not talk to a cluster. It builds and merges objects; creating,
  updating and deleting them is left to whatever client you use.
- It has no Prometheus metrics, recording rules or alerts, and no tool to
  document them.
- It does not build the per-node storage pool claims, mounter deployments or
  cleanup jobs, nor compute storage pool status.