import asyncio


async def gather_settled(*aws):
    """Ждёт завершения всех корутин, затем поднимает первую ошибку"""
    results = await asyncio.gather(*aws, return_exceptions=True)
    for result in results:
        if isinstance(result, BaseException):
            raise result
    return results
