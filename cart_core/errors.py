class ValidationError(ValueError):
    """Некорректный товар, количество или условие скидки"""
