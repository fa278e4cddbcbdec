"""Navigation — history synchronization and change broadcasting."""
