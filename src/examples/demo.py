#!/usr/bin/env python3
"""
Radio DSP Demo Script

This demo pushes a pulse-shaped QPSK signal through a Jakes-faded multipath
channel with additive noise and reports basic statistics of each stage.
"""

import numpy as np
from radio_dsp.channel.fading import RayleighFading, FadingType
from radio_dsp.channel.modem import ModulationMap, Modulator, Demodulator
from radio_dsp.channel.multipath import MultipathChannel
from radio_dsp.channel.noise import GaussNoise, add_awgn
from radio_dsp.filters.fir import FIRFilter, root_raised_cosine
from radio_dsp.transforms.fourier import TransformEngine
from radio_dsp.utils.conversions import kph_to_mps, linear_to_db

SPEED_OF_LIGHT = 3e8


def create_demo_scenario():
    """Create a pulse-shaped QPSK burst for demonstration."""
    print("Creating demo scenario...")

    # Set random seed for reproducibility
    np.random.seed(42)

    # Scenario parameters
    n_symbols = 256
    sps = 4
    rolloff = 0.35
    sample_rate = 1e6
    carrier_freq = 2.4e9
    speed_kph = 120.0

    modulator = Modulator(ModulationMap.psk(4))
    bits = np.random.randint(0, 2, size=2 * n_symbols)
    symbols = modulator.modulate_bits(bits)

    upsampled = np.zeros(n_symbols * sps, dtype=complex)
    upsampled[::sps] = symbols
    shaping = FIRFilter(root_raised_cosine(rolloff, 8, sps))
    tx = shaping.filter(upsampled)

    doppler_freq = kph_to_mps(speed_kph) * carrier_freq / SPEED_OF_LIGHT

    print(f"  - Symbols: {n_symbols} QPSK, {sps} samples/symbol, roll-off {rolloff}")
    print(f"  - Carrier: {carrier_freq / 1e9:.1f} GHz at {speed_kph:.0f} km/h")
    print(f"  - Maximum Doppler: {doppler_freq:.1f} Hz")

    return {
        'bits': bits,
        'symbols': symbols,
        'modulation_map': modulator.map,
        'tx': tx,
        'sample_rate': sample_rate,
        'doppler_freq': doppler_freq,
    }


def run_fading_demo(scenario):
    """Show the statistics of the Jakes fading generator."""
    print("\nRunning fading generator...")

    fading = RayleighFading(scenario['doppler_freq'], FadingType.JAKES, n_processes=4)
    times = np.arange(20000) / scenario['sample_rate'] * 50
    samples = fading.trajectory(times)

    power = np.mean(np.abs(samples) ** 2)
    print(f"  - Processes: {fading.size()}")
    print(f"  - Mean power: {power:.3f} (expected 1.0)")
    print(f"  - Peak magnitude: {np.max(np.abs(samples)):.3f} "
          f"(bound {fading.amplitude_bound:.3f})")

    return samples


def run_channel_demo(scenario, snr_db=20.0):
    """Pass the burst through a multipath channel and add noise."""
    print("\nRunning multipath channel...")

    channel = MultipathChannel(
        delays=[0, 2, 5],
        gains_db=[0.0, -3.0, -10.0],
        doppler_freq=scenario['doppler_freq'],
        sample_rate=scenario['sample_rate'],
    )
    faded = channel.run(scenario['tx'])
    rx, noise_stdev = add_awgn(faded, snr_db)

    tx_power = np.mean(np.abs(scenario['tx']) ** 2)
    rx_power = np.mean(np.abs(faded) ** 2)
    print(f"  - Transmit power: {linear_to_db(tx_power):.2f} dB")
    print(f"  - Faded power: {linear_to_db(rx_power):.2f} dB")
    print(f"  - Noise deviation: {noise_stdev:.4f} ({snr_db:.0f} dB SNR)")

    return rx


def run_modem_demo(scenario, snr_db=10.0):
    """Demodulate the symbols after flat fading with a known channel."""
    print("\nRunning flat-fading link...")

    symbols = scenario['symbols']
    fading = RayleighFading(scenario['doppler_freq'], FadingType.JAKES)
    h = fading.trajectory(np.arange(symbols.size) / scenario['sample_rate'])[:, 0]
    noise = GaussNoise.from_snr(snr_db)
    rx = h * symbols + noise.generate(symbols.size)

    demodulator = Demodulator(scenario['modulation_map'])
    llr = demodulator.demodulate(rx, channel=h)
    errors = int(np.sum(Demodulator.soft2hard(llr) != scenario['bits']))
    ber = errors / scenario['bits'].size

    print(f"  - LLR values: {demodulator.size()}")
    print(f"  - Bit errors: {errors} (BER {ber:.4f} at {snr_db:.0f} dB SNR)")

    return ber


def run_spectrum_demo(rx, size=1024):
    """Estimate the received spectrum with the transform engine."""
    print("\nComputing received spectrum...")

    engine = TransformEngine(size)
    frame = np.array(rx[:size], dtype=complex)
    engine.forward(frame)
    psd = np.abs(frame) ** 2 / size

    peak_bin = int(np.argmax(psd))
    print(f"  - Transform size: {engine.size}")
    print(f"  - Strongest bin: {peak_bin}")

    return psd


def main():
    """Main demo function."""
    print("Radio DSP Package Demo")
    print("=" * 40)
    print("This demo simulates a QPSK burst over a Rayleigh fading channel.")
    print()

    try:
        scenario = create_demo_scenario()

        run_fading_demo(scenario)
        run_modem_demo(scenario)
        rx = run_channel_demo(scenario)
        run_spectrum_demo(rx)

        print("\nDemo completed successfully!")

    except Exception as e:
        print(f"\nDemo failed with error: {e}")
        print("Please check your installation and try again.")
        return 1

    return 0


if __name__ == "__main__":
    exit(main())
