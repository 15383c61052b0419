from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    gh_api_key: str | None = None
    graphhopper_base_url: str = "https://graphhopper.com/api/1"
    graphhopper_vehicle: str = "car"
    graphhopper_locale: str = "es"
    graphhopper_timeout_seconds: float = 30.0
    max_points_per_batch: int = 5
    map_center_lat: float = -43.01
    map_center_lon: float = -65.17
    map_zoom_start: int = 10
    tile_url: str = "https://{s}.tile.openstreetmap.org/{z}/{x}/{y}.png"
    tile_attribution: str = "&copy; OpenStreetMap"
    tile_max_zoom: int = 19
    loader_delay_seconds: float = 0.01

    model_config = {"env_prefix": "", "case_sensitive": False}


settings = Settings()
