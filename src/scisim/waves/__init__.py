"""
Wave scenarios.

- SingleWaveSimulation: one travelling wave with selectable waveform
- WaveInterferenceSimulation: coherent point sources on a ring
- WaveReflectionSimulation: fixed/free end reflection and standing waves
- WaveDiffractionSimulation: slits and obstacles via secondary sources

Fields are closed-form functions of time, recomputed every frame.
"""

from scisim.waves.base import WaveSimulation
from scisim.waves.single_wave import SingleWaveSimulation, waveform
from scisim.waves.interference import WaveInterferenceSimulation
from scisim.waves.reflection import WaveReflectionSimulation
from scisim.waves.diffraction import WaveDiffractionSimulation

__all__ = [
    "WaveSimulation",
    "SingleWaveSimulation",
    "waveform",
    "WaveInterferenceSimulation",
    "WaveReflectionSimulation",
    "WaveDiffractionSimulation",
]
