"""Events ERP - gestão de eventos, orçamentos e solicitações de comunicação"""

__version__ = "1.0.0"
