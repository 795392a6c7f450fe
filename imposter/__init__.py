"""Find the Imposter - a pass-the-device word game."""
