"""
Application constants and metadata.
"""

# Application info
APP_NAME = "Metrics Publisher"
APP_VERSION = "0.3.0"

# Default values
DEFAULT_MQTT_PORT = 1883
DEFAULT_MQTT_TLS_PORT = 8883
DEFAULT_MQTT_KEEPALIVE = 20
DEFAULT_QOS = 0
DEFAULT_FAN_SPEED_TIMEOUT = 5.0
DEFAULT_DISK_PATH = "/"
DEFAULT_CPU_SAMPLE_INTERVAL = 0.5
