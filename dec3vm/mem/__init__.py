# dec3vm memory — flat 1000-word store
