from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class FinraShortInterestData(BaseModel):
    """One row of the consolidated equity short interest dataset."""

    model_config = ConfigDict(populate_by_name=True)

    symbol_code: Optional[str] = Field(None, alias="symbolCode")
    settlement_date: str = Field(alias="settlementDate")
    current_short_position: Optional[int] = Field(None, alias="currentShortPositionQuantity")
    previous_short_position: Optional[int] = Field(None, alias="previousShortPositionQuantity")
    average_daily_volume: Optional[int] = Field(None, alias="averageDailyVolumeQuantity")
    days_to_cover: Optional[Union[str, float]] = Field(None, alias="daysToCoverQuantity")
    change_percent: Optional[Union[str, float]] = Field(None, alias="changePercent")
