"""Generate reference documentation for configuration property catalogs."""
