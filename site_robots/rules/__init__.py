"""site_robots.rules: Шаблоны, оптимизатор и неизменяемый набор правил."""
