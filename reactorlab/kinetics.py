from dataclasses import dataclass
import math

# Kinetic data for the saponification of ethyl acetate
FREQUENCY_FACTOR = 3.23e7  # L/(mol s)
ACTIVATION_ENERGY = 48325.2  # J/mol
GAS_CONSTANT = 8.314  # J/(mol K)

# Celsius to Kelvin offset used throughout the lab sheets
KELVIN_OFFSET = 273


def rate_constant(A: float, Ea: float, R: float, T: float) -> float:
    """Arrhenius rate constant at temperature T given in Celsius."""
    T = T + KELVIN_OFFSET
    return A * math.exp(-Ea / (R * T))


@dataclass(frozen=True)
class Arrhenius:
    A: float  # frequency factor (L/mol s)
    Ea: float  # activation energy (J/mol)
    R: float = GAS_CONSTANT

    def k(self, T: float) -> float:
        return rate_constant(self.A, self.Ea, self.R, T)


SAPONIFICATION = Arrhenius(A=FREQUENCY_FACTOR, Ea=ACTIVATION_ENERGY)
