"""
Rustaceans — коллекционный токен, выпуск которого зависит от companion-коллекции Crane.

Пакеты:
- core: доменные модели, денежные единицы, JSON Schema контракты
- gatekeeper: гейты допуска (владение Crane, администратор, оплата)
- supply: учёт выпуска с годовым окном
- pricing: расчёт требуемой оплаты
- rendering: детерминированный генератор SVG и metadata
- issuance: контроллер выпуска (mint / craft)
"""

__version__ = "0.1.0"
