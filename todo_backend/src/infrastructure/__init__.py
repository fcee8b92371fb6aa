"""Infrastructure layer: settings, logging, persistence backends and wiring."""
