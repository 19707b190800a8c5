"""De Sitter space in flat slicing.

    ds^2 = -dt^2 + exp(H t)^2 (dr^2 + r^2 dtheta^2 + r^2 sin^2(theta) dphi^2)

Ground truth:
- Vacuum with cosmological constant: G_{mu nu} + Lambda g_{mu nu} = 0,
  Lambda = 3 H^2
- Ricci scalar: R = 12 H^2
"""

from __future__ import annotations

from .template import SolutionTemplate

DE_SITTER = SolutionTemplate(
    name="de Sitter",
    components=(
        ("-1", "0", "0", "0"),
        ("0", "exp(H*t)^2", "0", "0"),
        ("0", "0", "exp(H*t)^2 * r^2", "0"),
        ("0", "0", "0", "exp(H*t)^2 * r^2 * sin(theta)^2"),
    ),
    parameters={"H": "Hubble constant", "Lambda": "cosmological constant 3H^2"},
    domain="exponential expansion",
    cosmological_constant="3*H^2",
    ground_truth={"ricci_scalar": "12*H^2"},
)
