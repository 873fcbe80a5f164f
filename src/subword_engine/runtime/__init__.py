"""Process-wide runtime services: telemetry and context flags."""
