"""Example scripts for the radio DSP package."""
