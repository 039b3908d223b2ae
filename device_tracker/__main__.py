from device_tracker.main import run

run()
