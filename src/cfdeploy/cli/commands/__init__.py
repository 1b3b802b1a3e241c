"""cfdeploy CLI commands."""
