"""
MQTT client wrapper using aiomqtt.

One connection per run. Publishing is best effort: errors are logged
and reported to the caller as False, never raised.
"""

import ssl
import uuid

import aiomqtt

from ..config.schema import MQTTConfig
from ..logging import get_logger

logger = get_logger("mqtt.client")


class MQTTClient:
    """Async MQTT client wrapper around aiomqtt."""

    def __init__(self, config: MQTTConfig):
        """
        Initialize MQTT client.

        Args:
            config: MQTT configuration
        """
        self.config = config

        self._client: aiomqtt.Client | None = None
        self._connected = False
        self._client_id = config.client_id or f"metrics_publisher_{uuid.uuid4().hex[:8]}"

    @property
    def connected(self) -> bool:
        """Check if client is connected."""
        return self._connected

    def _create_client(self) -> aiomqtt.Client:
        """Create a new aiomqtt client instance."""
        return aiomqtt.Client(
            hostname=self.config.host,
            port=self.config.port,
            username=self.config.username,
            password=self.config.password,
            identifier=self._client_id,
            keepalive=self.config.keepalive,
            tls_context=ssl.create_default_context() if self.config.tls else None,
            clean_session=True,
        )

    async def connect(self) -> None:
        """
        Connect to MQTT broker.

        Raises:
            aiomqtt.MqttError: If connection fails
        """
        logger.debug(f"Connecting to MQTT broker {self.config.address} as {self._client_id}")

        client = self._create_client()
        await client.__aenter__()
        self._client = client
        self._connected = True

        logger.info(f"Connected to MQTT broker at {self.config.address}")

    async def disconnect(self) -> None:
        """Disconnect from MQTT broker."""
        if self._client and self._connected:
            try:
                await self._client.__aexit__(None, None, None)
            except aiomqtt.MqttError as e:
                logger.debug(f"Error while disconnecting: {e}")

            self._connected = False
            self._client = None
            logger.info("Disconnected from MQTT broker")

    async def publish(
        self,
        topic: str,
        payload: str,
        qos: int | None = None,
        retain: bool = False,
    ) -> bool:
        """
        Publish a message to a topic.

        Args:
            topic: MQTT topic
            payload: Message payload
            qos: QoS level (default from config)
            retain: Retain flag

        Returns:
            True if the message was handed to the broker connection
        """
        if qos is None:
            qos = self.config.qos

        if not (self._client and self._connected):
            logger.error(f"Not connected, dropping message for {topic}")
            return False

        logger.debug(f"Publishing to {topic}: {payload[:200]}{'...' if len(payload) > 200 else ''}")
        try:
            await self._client.publish(topic, payload, qos=qos, retain=retain)
        except aiomqtt.MqttError as e:
            logger.error(f"Error sending message to {topic}: {e}")
            return False
        return True
