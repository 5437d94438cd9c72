"""
Services layer - long-lived state and dependency wiring.

- config_svc: layered configuration
- domain/media_stats_svc: data acquisition facade
- infrastructure/mount_coordinator_svc: mount lifecycle and render cycles
- infrastructure/stats_button_svc: navbar button + statistics modal
"""
