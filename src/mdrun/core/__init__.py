"""mdrun core package: scanning, materializing, running."""
