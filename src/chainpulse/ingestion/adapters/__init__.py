"""Provider adapters implementing IChainDataProvider."""
