"""Properties app: listings, listing images and the completion checklist."""
