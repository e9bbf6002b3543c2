#app/models/enums.py
from __future__ import annotations
from enum import Enum


class RequestStatus(str, Enum):
    pending = "pending"
    accepted = "accepted"
    declined = "declined"


class MessageKind(str, Enum):
    text = "text"
    child_data_request = "child_data_request"


# Permitted-activity labels offered by the verification questionnaire.
ACTIVITY_CATALOG = (
    "Brincadeiras ao ar livre",
    "Jogos educativos",
    "Leitura",
    "Desenho/Pintura",
    "Música",
    "Culinária básica",
    "Artesanato",
    "Esportes",
)
