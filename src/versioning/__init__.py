"""Package specifier parsing and npm semver checks."""
