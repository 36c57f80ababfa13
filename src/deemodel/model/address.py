"""Object path resolution for Dee models."""

from deemodel.constants import MODEL_OBJECT_ROOT


def model_object_path(service_name: str) -> str:
    """Derive the object path of a model from the bus name publishing it.

    Every ``.`` becomes ``/`` and the result is placed under the fixed
    model root. No validation is done; a bad name fails on the bus.

    Example:
        >>> model_object_path("com.canonical.Unity.Lens.Files.T1")
        '/com/canonical/dee/model/com/canonical/Unity/Lens/Files/T1'
    """
    return f"{MODEL_OBJECT_ROOT}/{service_name.replace('.', '/')}"
