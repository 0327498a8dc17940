"""Алгоритми одномірної оптимізації: журнал, дужка, золотий перетин, Брент."""
