"""Environment Monitor: air quality, temperature and weather alerts."""

import asyncio

from ...environment import (
    aqi_risk,
    estimate_aqi_from_conditions,
    get_season,
    overall_environmental_severity,
    simulate_environment,
    temperature_risk,
)
from ...logging_config import get_logger
from ...models import Action, ActionType, AgentRole, Perception, Reasoning
from ...toolkit import IToolkit
from ..base import Agent, now

logger = get_logger(__name__)

LIVE_CONFIDENCE = 0.95
FALLBACK_CONFIDENCE = 0.7

DEFAULT_TEMPERATURE = 25
DEFAULT_HUMIDITY = 60


class EnvironmentMonitorAgent(Agent):
    """Perception agent tracking live environmental conditions."""

    AGENT_ID = "environment-monitor"

    def __init__(self, toolkit: IToolkit):
        super().__init__(
            agent_id=self.AGENT_ID,
            name="Environment Monitor",
            role=AgentRole.PERCEPTION,
            toolkit=toolkit,
            description="Monitors environmental conditions (AQI, temperature, weather)",
        )

    async def perceive(self) -> Perception:
        config = self.toolkit.get_hospital_config()
        on = self.toolkit.today()
        season = get_season(on)
        city = self.toolkit.city()
        provider = self.toolkit.environment

        try:
            weather, air = await asyncio.gather(
                provider.get_weather(city, config.location.country),
                provider.get_air_quality(city, config.location.country),
            )
        except Exception as e:
            # Data-source failures degrade confidence, never the pipeline
            logger.warning(
                "Environment provider error, using seasonal defaults: %s",
                e,
                extra={"agent_id": self.agent_id},
            )
            weather, air = None, None

        if weather or air:
            if air:
                aqi = air.aqi
            else:
                aqi = estimate_aqi_from_conditions(weather.conditions, season)
            data = {
                "location": city,
                "aqi": aqi,
                "temperature": weather.temperature if weather else DEFAULT_TEMPERATURE,
                "humidity": weather.humidity if weather else DEFAULT_HUMIDITY,
                "weather_alert": weather.alert if weather else None,
                "season": season.value,
                "source": "live",
            }
            confidence = LIVE_CONFIDENCE
            logger.info(
                "Live environment for %s: AQI=%s, Temp=%s, Humidity=%s",
                city,
                data["aqi"],
                data["temperature"],
                data["humidity"],
            )
        else:
            logger.warning(
                "No live environmental data for %s, using seasonal defaults", city
            )
            simulated = simulate_environment(season, city, on)
            data = {
                "location": city,
                "aqi": simulated.aqi,
                "temperature": simulated.temperature,
                "humidity": simulated.humidity,
                "rainfall": simulated.rainfall,
                "weather_alert": simulated.weather_alert,
                "season": season.value,
                "source": "seasonal_fallback",
            }
            confidence = FALLBACK_CONFIDENCE

        return Perception(
            agent_id=self.agent_id,
            timestamp=now(),
            data=data,
            confidence=confidence,
        )

    def reason(self, perception: Perception) -> Reasoning:
        data = perception.data
        aqi_band = aqi_risk(data["aqi"])
        temp_band = temperature_risk(data["temperature"])
        severity = overall_environmental_severity(aqi_band, temp_band)

        conclusions = [
            f"AQI: {data['aqi']} ({aqi_band.level}) - {aqi_band.health_impact}",
            f"Temperature: {data['temperature']}°C ({temp_band.level}) - {temp_band.health_impact}",
            f"Humidity: {data['humidity']}%",
        ]
        if data.get("weather_alert"):
            conclusions.append(f"Weather Alert: {data['weather_alert']}")

        return Reasoning(
            agent_id=self.agent_id,
            timestamp=now(),
            conclusions=conclusions,
            confidence=min(0.85, perception.confidence),
            reasoning=(
                f"Environmental monitoring shows {aqi_band.level} air quality and "
                f"{temp_band.level} temperature conditions. "
                f"Overall environmental health risk: {severity.value}."
            ),
        )

    def act(self, reasoning: Reasoning) -> Action:
        data = self.latest_perception().data
        severity = overall_environmental_severity(
            aqi_risk(data["aqi"]), temperature_risk(data["temperature"])
        )

        action = Action(
            agent_id=self.agent_id,
            timestamp=now(),
            type=ActionType.ENVIRONMENTAL_ASSESSMENT.value,
            data={
                "environmental_risks": list(reasoning.conclusions),
                "severity": severity.value,
                "aqi": data["aqi"],
                "temperature": data["temperature"],
                "humidity": data["humidity"],
                "season": data["season"],
                "source": data["source"],
            },
            explanation=reasoning.reasoning,
        )
        self.share(action)
        return action
