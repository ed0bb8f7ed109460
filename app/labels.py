"""Thai display labels for the selection surface."""

from __future__ import annotations

from models.records import TimeWindow, VariableKey

DASHBOARD_TITLE = "ระบบตรวจจับความผิดปกติของเซ็นเซอร์"

WINDOW_LABELS: dict[TimeWindow, str] = {
    TimeWindow.last_24_hours: "24 ชั่วโมง",
    TimeWindow.last_7_days: "7 วัน",
    TimeWindow.last_30_days: "30 วัน",
    TimeWindow.all: "ทั้งหมด",
}

VARIABLE_LABELS: dict[VariableKey, str] = {
    VariableKey.temperature: "อุณหภูมิ (°C)",
    VariableKey.humidity: "ความชื้น (%)",
    VariableKey.vpo: "VPO",
    VariableKey.dew_point: "จุดน้ำค้าง (°C)",
    VariableKey.ec: "EC",
    VariableKey.ph: "pH",
    VariableKey.co2: "CO2 (ppm)",
}
