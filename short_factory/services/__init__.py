"""Pipeline services: scene preparation, asset synthesis, footage, captions, music, rendering."""
