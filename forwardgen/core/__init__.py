"""forwardgen.core: IR・Loader・Normalizer・Validator"""
