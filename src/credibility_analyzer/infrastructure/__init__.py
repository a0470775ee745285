"""Infrastructure: config, logging, cancellation and wiring."""
