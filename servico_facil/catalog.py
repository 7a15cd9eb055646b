# Service categories and neighbourhoods offered in the app's pickers.

SERVICES = [
    {"id": "eletricista", "name": "Eletricista"},
    {"id": "encanador", "name": "Encanador"},
    {"id": "diarista", "name": "Diarista"},
    {"id": "pintor", "name": "Pintor"},
    {"id": "jardineiro", "name": "Jardineiro"},
    {"id": "marceneiro", "name": "Marceneiro"},
    {"id": "pedreiro", "name": "Pedreiro"},
    {"id": "chaveiro", "name": "Chaveiro"},
    {"id": "tecnico-ar", "name": "Técnico em Ar Condicionado"},
    {"id": "motoboy", "name": "Motoboy"},
    {"id": "vidraceiro", "name": "Vidraceiro"},
    {"id": "faxineiro", "name": "Faxineiro"},
    {"id": "motorista", "name": "Motorista"},
    {"id": "ajudante-geral", "name": "Ajudante Geral"},
    {"id": "seguranca", "name": "Segurança"},
    {"id": "assistente-tecnico", "name": "Assistente Técnico"},
    {"id": "eletronico", "name": "Técnico em Eletrônicos"},
    {"id": "montador", "name": "Montador de Móveis"},
    {"id": "cabeleireiro", "name": "Cabeleireiro"},
    {"id": "massagista", "name": "Massagista"},
]

NEIGHBORHOODS = [
    "Centro",
    "Copacabana",
    "Ipanema",
    "Botafogo",
    "Flamengo",
    "Tijuca",
    "Barra da Tijuca",
    "Jacarepaguá",
    "Vila Isabel",
    "Maracanã",
    "Lapa",
    "Santa Teresa",
    "Leblon",
    "Gávea",
    "Laranjeiras",
]
