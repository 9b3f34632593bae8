from dataclasses import dataclass
from enum import Enum


class DestinationName(str, Enum):
    SEOUL = "SEOUL"
    BUSAN = "BUSAN"
    INCHEON = "INCHEON"
    GANGNEUNG = "GANGNEUNG"
    JEJU = "JEJU"
    GYEONGJU = "GYEONGJU"
    JEONJU = "JEONJU"
    YEOSU = "YEOSU"
    SOKCHO = "SOKCHO"
    DAEGU = "DAEGU"


@dataclass
class Destination:
    id: int
    destination_name: DestinationName
