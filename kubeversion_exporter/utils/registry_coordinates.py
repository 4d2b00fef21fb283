"""Map image names to the registry endpoint and repository holding their tags."""

from dataclasses import dataclass

from kubeversion_exporter.exceptions import (
    MalformedImageReferenceException,
    UnresolvableImageException,
)

DEFAULT_REGISTRY_ENDPOINT = "https://registry-1.docker.io"
DOCKER_HUB_HOST = "docker.io"
OFFICIAL_IMAGE_NAMESPACE = "library"


@dataclass(frozen=True)
class RegistryCoordinate:
    """Registry endpoint URL and repository path of an image."""

    endpoint: str
    repository: str


@dataclass(frozen=True)
class ImageReference:
    """A running image reference split into name and tag."""

    reference: str
    name: str
    tag: str


def split_image_reference(reference: str) -> ImageReference:
    """Split ``<name>:<tag>`` on the last colon.

    Raises:
        MalformedImageReferenceException: the reference has no tag, an empty
            part, pins a digest, or the colon belongs to a registry port.
    """
    name, separator, tag = reference.rpartition(":")
    if not separator or not name or not tag or "/" in tag or "@" in reference:
        raise MalformedImageReferenceException(reference)
    return ImageReference(reference=reference, name=name, tag=tag)


def resolve(image_name: str) -> RegistryCoordinate:
    """Resolve an image name to its registry coordinate.

    Purely structural: one segment is an official Docker Hub image, two
    segments a Docker Hub user image, three segments a registry host followed
    by the repository path. Anything else is not guessed at.

    Raises:
        UnresolvableImageException: the name has no supported shape.
    """
    parts = image_name.split("/")

    match parts:
        case [name]:
            return RegistryCoordinate(
                DEFAULT_REGISTRY_ENDPOINT, f"{OFFICIAL_IMAGE_NAMESPACE}/{name}"
            )
        case [namespace, name]:
            return RegistryCoordinate(DEFAULT_REGISTRY_ENDPOINT, f"{namespace}/{name}")
        case [host, namespace, name] if host == DOCKER_HUB_HOST:
            return RegistryCoordinate(DEFAULT_REGISTRY_ENDPOINT, f"{namespace}/{name}")
        case [host, namespace, name]:
            return RegistryCoordinate(f"https://{host}", f"{namespace}/{name}")
        case _:
            raise UnresolvableImageException(image_name)
