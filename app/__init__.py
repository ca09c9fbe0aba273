"""Firmware server: OTA firmware lifecycle for networked devices."""
