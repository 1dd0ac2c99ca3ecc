"""Device abstraction for state-vector simulation."""

from __future__ import annotations

import os

import torch

_DEVICE_ENV_VAR = "QVECTOR_DEVICE"
SUPPORTED_DEVICES = ("sv_cpu", "sv_cuda")


class Device:
    """
    A logical simulation device: the torch device that holds the amplitude
    buffer plus the complex dtype used for states and gate matrices.

    Instances are treated as immutable after construction.
    """

    def __init__(
        self,
        name: str,
        torch_device: torch.device,
        complex_dtype: torch.dtype = torch.complex128,
    ) -> None:
        """
        Initialize a Device.

        Args:
            name: Logical device name (e.g., "sv_cpu", "sv_cuda").
            torch_device: Underlying PyTorch device.
            complex_dtype: Complex dtype for states and gate matrices.
        """
        if not complex_dtype.is_complex:
            raise ValueError(f"complex_dtype must be a complex dtype, got {complex_dtype}")
        self.name = name
        self.torch_device = torch_device
        self.complex_dtype = complex_dtype

    def __repr__(self) -> str:
        return (
            f"Device(name={self.name!r}, torch_device={self.torch_device}, "
            f"complex_dtype={self.complex_dtype})"
        )

    def as_torch_device(self) -> torch.device:
        """Return the underlying PyTorch device."""
        return self.torch_device


def device(name: str, complex_dtype: torch.dtype = torch.complex128) -> Device:
    """
    Create a Device instance from a device name.

    Supported device names:
        - "sv_cpu": CPU-based statevector device
        - "sv_cuda": CUDA-based statevector device (only if CUDA is available)

    Args:
        name: Device name string.
        complex_dtype: Complex dtype for the device. Defaults to complex128.

    Returns:
        A Device instance.

    Raises:
        RuntimeError: If "sv_cuda" is requested but CUDA is not available.
        ValueError: If the device name is not supported.
    """
    if name == "sv_cpu":
        return Device("sv_cpu", torch.device("cpu"), complex_dtype)
    if name == "sv_cuda":
        if not torch.cuda.is_available():
            raise RuntimeError(
                "CUDA device requested but torch.cuda.is_available() is False"
            )
        return Device("sv_cuda", torch.device("cuda"), complex_dtype)
    raise ValueError(
        f"Unsupported device name: {name!r}. Supported devices: {list(SUPPORTED_DEVICES)}"
    )


def default_device() -> Device:
    """
    Return the default device.

    The ``QVECTOR_DEVICE`` environment variable picks the device name;
    it falls back to "sv_cpu".
    """
    return device(os.getenv(_DEVICE_ENV_VAR, "sv_cpu").strip() or "sv_cpu")


def resolve_device(spec: Device | str | torch.device | None) -> Device:
    """
    Turn any accepted device specification into a Device.

    Args:
        spec: A Device, a device name ("sv_cpu", "sv_cuda"), a torch.device,
            or None for the default device.

    Raises:
        ValueError: For unsupported names or torch device types.
        TypeError: For any other kind of object.
    """
    if spec is None:
        return default_device()
    if isinstance(spec, Device):
        return spec
    if isinstance(spec, str):
        return device(spec)
    if isinstance(spec, torch.device):
        if spec.type == "cpu":
            return device("sv_cpu")
        if spec.type == "cuda":
            return device("sv_cuda")
        raise ValueError(
            f"Unsupported torch.device type: {spec.type}. "
            "Only 'cpu' and 'cuda' are supported."
        )
    raise TypeError(
        f"device must be Device, str, torch.device, or None, got {type(spec)}"
    )
